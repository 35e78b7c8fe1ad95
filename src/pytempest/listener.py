"""Receive loop: datagram -> event -> cache -> filter -> stream.

The three ``listen_udp*`` helpers are thin wrappers over
:class:`TempestListener` with different :class:`TempestConfig` options.
Each returns once the socket is bound; events then flow on the returned
:class:`~pytempest.stream.EventStream` until it is closed with
:meth:`~pytempest.stream.EventStream.aclose`.
"""

from __future__ import annotations

import asyncio
import contextlib
import dataclasses
import logging
from collections.abc import Iterable
from types import TracebackType

from pytempest._transport import Receiver, UdpReceiver
from pytempest.config import TempestConfig
from pytempest.exceptions import (
    TempestDecodeError,
    TempestDeliveryError,
    TempestFieldError,
    TempestTransportError,
    TempestUnknownEventError,
)
from pytempest.ingestion import decode_datagram
from pytempest.state import StationCache
from pytempest.stream import EventStream

_logger = logging.getLogger(__name__)

_RETRY_DELAY = 0.1
"""Seconds to wait before retrying after a receive error."""


class TempestListener:
    """Listen for Tempest hub broadcasts.

    Usage::

        async with TempestListener(TempestConfig(cache_enabled=True)) as listener:
            async for event in listener.stream:
                print(event)
                print(listener.cache.get_air_temperature(event.serial_number))

    Parameters
    ----------
    config : TempestConfig or None
        Listener configuration. Defaults to ``TempestConfig()``.
    receiver : Receiver or None
        Datagram source. Defaults to a :class:`UdpReceiver` bound from
        *config*.
    """

    def __init__(
        self,
        config: TempestConfig | None = None,
        *,
        receiver: Receiver | None = None,
    ) -> None:
        self._config = config or TempestConfig()
        self._receiver: Receiver = receiver or UdpReceiver(self._config)
        self._cache: StationCache | None = StationCache() if self._config.cache_enabled else None
        self._stream = EventStream(
            maxsize=self._config.queue_size,
            delivery_timeout=self._config.delivery_timeout,
            on_close=self.stop,
        )
        self._task: asyncio.Task[None] | None = None

    @property
    def config(self) -> TempestConfig:
        return self._config

    @property
    def cache(self) -> StationCache | None:
        """Station cache, or ``None`` when caching is disabled."""
        return self._cache

    @property
    def stream(self) -> EventStream:
        return self._stream

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def local_address(self) -> tuple[str, int]:
        """Bound ``(host, port)`` of the default UDP receiver."""
        if not isinstance(self._receiver, UdpReceiver):
            raise TypeError("local_address is only available for UdpReceiver")
        return self._receiver.local_address

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def start(self) -> None:
        """Bind the socket and start the receive task.

        Raises
        ------
        TempestTransportError
            If the socket cannot be bound.
        """
        if self._task is not None:
            return
        if isinstance(self._receiver, UdpReceiver):
            self._receiver.bind()
        self._task = asyncio.get_running_loop().create_task(self._run(), name="pytempest-listener")
        _logger.debug(
            "Listener started cache=%s filter=%s",
            self._cache is not None,
            sorted(self._config.serial_filter) if self._config.serial_filter is not None else None,
        )

    async def stop(self) -> None:
        """Stop receiving, release the socket and close the stream."""
        task, self._task = self._task, None
        if task is not None and task is not asyncio.current_task():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._receiver.close()
        self._stream.close()
        _logger.debug("Listener stopped")

    async def __aenter__(self) -> TempestListener:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Receive loop
    # ------------------------------------------------------------------

    async def _run(self) -> None:
        try:
            while True:
                try:
                    data, addr = await self._receiver.recv()
                except TempestTransportError as exc:
                    if self._receiver.closed:
                        _logger.debug("Receiver closed, leaving receive loop")
                        break
                    _logger.warning("UDP receive error: %s", exc)
                    await asyncio.sleep(_RETRY_DELAY)
                    continue
                await self.handle_datagram(data, addr)
        finally:
            self._stream.close()

    async def handle_datagram(self, data: bytes, addr: tuple[str, int] | None = None) -> None:
        """Decode, cache, filter and deliver one datagram.

        Decode failures discard the datagram. A field error while caching
        skips only the cache update. Every failure is logged; nothing is raised.
        """
        try:
            event = decode_datagram(data)
        except TempestUnknownEventError as exc:
            _logger.warning("Discarding datagram from %s: unknown event type %r", addr, exc.event_type)
            return
        except TempestDecodeError as exc:
            _logger.warning("Discarding datagram from %s: %s", addr, exc)
            return

        if self._cache is not None:
            try:
                self._cache.apply(event)
            except TempestFieldError as exc:
                _logger.warning("Not caching %s from %s: %s", event.type, event.serial_number, exc)

        if not self._config.accepts(event.serial_number):
            _logger.debug("Filtered %s from %s", event.type, event.serial_number)
            return

        try:
            await self._stream.send(event)
        except TempestDeliveryError as exc:
            _logger.warning("Dropped %s from %s: %s", event.type, event.serial_number, exc)


async def _start(config: TempestConfig) -> TempestListener:
    listener = TempestListener(config)
    await listener.start()
    return listener


async def listen_udp(config: TempestConfig | None = None) -> EventStream:
    """Listen for all events on the configured address."""
    listener = await _start(config or TempestConfig())
    return listener.stream


async def listen_udp_with_cache(config: TempestConfig | None = None) -> tuple[StationCache, EventStream]:
    """Listen for all events and maintain a cache of hubs and stations."""
    config = dataclasses.replace(config or TempestConfig(), cache_enabled=True)
    listener = await _start(config)
    assert listener.cache is not None  # noqa: S101
    return listener.cache, listener.stream


async def listen_udp_subscribe(
    serial_numbers: Iterable[str],
    config: TempestConfig | None = None,
) -> EventStream:
    """Listen for events whose ``serial_number`` is in *serial_numbers*."""
    listener = await _start((config or TempestConfig()).with_filter(serial_numbers))
    return listener.stream
