"""Bounded asynchronous event channel between the listener and its consumer."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Any

from pytempest.config import DEFAULT_QUEUE_SIZE
from pytempest.exceptions import TempestDeliveryError
from pytempest.models import Event

_logger = logging.getLogger(__name__)

_CLOSED: Any = object()


class EventStream:
    """Async iterator of decoded events.

    ``recv()`` returns ``None`` once the stream has been closed and every
    queued event has been consumed; ``async for`` stops at the same point.

    Parameters
    ----------
    maxsize : int
        Queue capacity.
    delivery_timeout : float
        Seconds :meth:`send` waits for queue space.
    on_close : callable or None
        Awaited once by :meth:`aclose`, used to stop the owning listener.
    """

    def __init__(
        self,
        *,
        maxsize: int = DEFAULT_QUEUE_SIZE,
        delivery_timeout: float = 1.0,
        on_close: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=maxsize)
        self._delivery_timeout = delivery_timeout
        self._on_close = on_close
        self._closed = False
        self._exhausted = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def send(self, event: Event) -> None:
        """Queue *event* for the consumer.

        Raises
        ------
        TempestDeliveryError
            If the stream is closed, or still full after ``delivery_timeout``.
        """
        if self._closed:
            raise TempestDeliveryError("Event stream is closed")
        try:
            await asyncio.wait_for(self._queue.put(event), self._delivery_timeout)
        except TimeoutError as exc:
            raise TempestDeliveryError(
                f"Event stream full for {self._delivery_timeout}s; consumer is not keeping up"
            ) from exc

    async def recv(self) -> Event | None:
        """Await the next event, or ``None`` once closed and drained."""
        if self._exhausted:
            return None
        if self._closed and self._queue.empty():
            self._exhausted = True
            return None
        item = await self._queue.get()
        if item is _CLOSED:
            self._exhausted = True
            return None
        return item

    def close(self) -> None:
        """Stop accepting events. Already queued events remain receivable."""
        if self._closed:
            return
        self._closed = True
        # Wakes a consumer blocked on an empty queue. A full queue needs no
        # marker: recv() reports exhaustion once it drains.
        with contextlib.suppress(asyncio.QueueFull):
            self._queue.put_nowait(_CLOSED)
        _logger.debug("Event stream closed")

    async def aclose(self) -> None:
        """Close the stream and stop the listener feeding it."""
        self.close()
        on_close, self._on_close = self._on_close, None
        if on_close is not None:
            await on_close()

    def __aiter__(self) -> AsyncIterator[Event]:
        return self

    async def __anext__(self) -> Event:
        event = await self.recv()
        if event is None:
            raise StopAsyncIteration
        return event
