"""Custom exception hierarchy for pytempest."""

from __future__ import annotations

from typing import Any


class TempestError(Exception):
    """Base exception for all pytempest errors."""


class TempestConfigError(TempestError):
    """Invalid or missing configuration."""


class TempestTransportError(TempestError):
    """UDP-level failure (bind or receive)."""

    def __init__(
        self,
        message: str,
        *,
        address: str = "",
        port: int | None = None,
    ) -> None:
        self.address = address
        self.port = port
        super().__init__(message)


class TempestDecodeError(TempestError):
    """Datagram could not be decoded into an event (malformed JSON, wrong shape)."""

    def __init__(self, message: str, *, event_type: str | None = None) -> None:
        self.event_type = event_type
        super().__init__(message)


class TempestUnknownEventError(TempestDecodeError):
    """Datagram carries a ``type`` tag with no registered decoder."""


class TempestFieldError(TempestError):
    """A named field could not be read from a decoded event."""

    def __init__(self, message: str, *, field: str = "") -> None:
        self.field = field
        super().__init__(message)


class TempestParseError(TempestFieldError):
    """Required positional field (or its enclosing array) is missing."""


class TempestUnexpectedValueError(TempestFieldError):
    """Enumerated code outside the known range.

    The offending wire value is kept on ``value`` so callers can log it.
    """

    def __init__(self, message: str, *, field: str = "", value: Any = None) -> None:
        self.value = value
        super().__init__(message, field=field)


class TempestDeliveryError(TempestError):
    """Event could not be handed to the consumer (stream closed or full)."""
