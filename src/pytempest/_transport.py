"""UDP transport for the hub broadcast."""

from __future__ import annotations

import asyncio
import logging
import socket
from typing import Protocol

from pytempest.config import TempestConfig
from pytempest.exceptions import TempestTransportError

_logger = logging.getLogger(__name__)


class Receiver(Protocol):
    """Structural receiver interface used by the listener.

    Lets tests hand the listener a fake datagram source while keeping the
    production implementation (`UdpReceiver`) concrete.
    """

    @property
    def closed(self) -> bool: ...

    async def recv(self) -> tuple[bytes, tuple[str, int]]: ...

    def close(self) -> None: ...


class UdpReceiver:
    """Non-blocking UDP socket read through the running event loop."""

    def __init__(self, config: TempestConfig) -> None:
        self._config = config
        self._sock: socket.socket | None = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def local_address(self) -> tuple[str, int]:
        """Bound ``(host, port)``; resolves an ephemeral port ``0``."""
        if self._sock is None:
            raise TempestTransportError("Receiver is not bound", address=self._config.bind_address, port=self._config.port)
        host, port = self._sock.getsockname()[:2]
        return host, port

    def bind(self) -> None:
        """Open and bind the socket.

        Raises
        ------
        TempestTransportError
            If the address cannot be bound.
        """
        if self._sock is not None:
            return
        sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            sock.setblocking(False)
            sock.bind((self._config.bind_address, self._config.port))
        except OSError as exc:
            sock.close()
            raise TempestTransportError(
                f"Failed to bind UDP {self._config.bind_address}:{self._config.port}: {exc}",
                address=self._config.bind_address,
                port=self._config.port,
            ) from exc
        self._sock = sock
        _logger.debug("UDP socket bound to %s:%s", *self.local_address)

    async def recv(self) -> tuple[bytes, tuple[str, int]]:
        """Await one datagram, truncated to ``buffer_size`` bytes.

        Raises
        ------
        TempestTransportError
            On any socket error, or if the receiver is closed.
        """
        if self._sock is None or self._closed:
            raise TempestTransportError("Receiver is closed", address=self._config.bind_address, port=self._config.port)
        loop = asyncio.get_running_loop()
        try:
            data, addr = await loop.sock_recvfrom(self._sock, self._config.buffer_size)
        except OSError as exc:
            raise TempestTransportError(
                f"UDP receive failed: {exc}",
                address=self._config.bind_address,
                port=self._config.port,
            ) from exc
        return data, addr

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._sock is not None:
            self._sock.close()
            _logger.debug("UDP socket closed")
