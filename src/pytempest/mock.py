"""Synthetic Tempest device for tests: sends datagrams to a loopback port."""

from __future__ import annotations

import json
import socket
from types import TracebackType
from typing import Any

from pytempest.exceptions import TempestTransportError

LOOPBACK = "127.0.0.1"


class MockSender:
    """UDP sender bound to ``127.0.0.1`` on an OS-assigned port."""

    def __init__(self) -> None:
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            self._sock.bind((LOOPBACK, 0))
        except OSError as exc:
            self._sock.close()
            raise TempestTransportError(f"Unable to bind mock sender: {exc}", address=LOOPBACK, port=0) from exc

    @classmethod
    def bind(cls) -> MockSender:
        return cls()

    @property
    def local_address(self) -> tuple[str, int]:
        host, port = self._sock.getsockname()[:2]
        return host, port

    def send(self, payload: bytes | str | dict[str, Any], port: int) -> None:
        """Send *payload* to ``127.0.0.1:port``.

        ``str`` payloads are UTF-8 encoded; ``dict`` payloads are JSON encoded
        first.
        """
        if isinstance(payload, dict):
            payload = json.dumps(payload)
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        try:
            self._sock.sendto(payload, (LOOPBACK, port))
        except OSError as exc:
            raise TempestTransportError(f"Mock send failed: {exc}", address=LOOPBACK, port=port) from exc

    def close(self) -> None:
        self._sock.close()

    def __enter__(self) -> MockSender:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
