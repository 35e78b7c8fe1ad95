"""Listener configuration for pytempest."""

from __future__ import annotations

import dataclasses
import os
from collections.abc import Iterable
from typing import Any

from pytempest.exceptions import TempestConfigError

DEFAULT_PORT = 50222
"""UDP port the Tempest hub broadcasts on."""

DEFAULT_BUFFER_SIZE = 4096
DEFAULT_QUEUE_SIZE = 16


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_serials(value: str) -> frozenset[str]:
    return frozenset(part.strip() for part in value.split(",") if part.strip())


@dataclasses.dataclass(frozen=True)
class TempestConfig:
    """Listener configuration.

    Parameters
    ----------
    bind_address : str
        Local IPv4 address to bind. Defaults to all interfaces.
    port : int
        Local UDP port. ``0`` asks the OS for an ephemeral port.
    cache_enabled : bool
        Maintain a :class:`pytempest.state.store.StationCache` of hubs and
        stations seen on the network.
    serial_filter : frozenset of str or None
        When set, only events whose ``serial_number`` is a member are
        delivered. Filtered events are still cached.
    buffer_size : int
        Receive buffer size in bytes; larger datagrams are truncated.
    queue_size : int
        Capacity of the delivery queue.
    delivery_timeout : float
        Seconds to wait for queue space before an event is dropped.
    """

    bind_address: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    cache_enabled: bool = False
    serial_filter: frozenset[str] | None = None
    buffer_size: int = DEFAULT_BUFFER_SIZE
    queue_size: int = DEFAULT_QUEUE_SIZE
    delivery_timeout: float = 1.0

    def __post_init__(self) -> None:
        if self.serial_filter is not None and not isinstance(self.serial_filter, frozenset):
            if isinstance(self.serial_filter, str):
                raise TempestConfigError("serial_filter must be a collection of serial numbers, not a string")
            object.__setattr__(self, "serial_filter", frozenset(self.serial_filter))
        if not 0 <= self.port <= 65535:
            raise TempestConfigError(f"port out of range: {self.port}")
        if self.buffer_size <= 0:
            raise TempestConfigError("buffer_size must be positive")
        if self.queue_size <= 0:
            raise TempestConfigError("queue_size must be positive")
        if self.delivery_timeout < 0:
            raise TempestConfigError("delivery_timeout must not be negative")

    def accepts(self, serial_number: str) -> bool:
        """Whether an event for *serial_number* passes the delivery filter."""
        return self.serial_filter is None or serial_number in self.serial_filter

    def with_filter(self, serial_numbers: Iterable[str]) -> TempestConfig:
        """Return a copy subscribed to *serial_numbers*."""
        return dataclasses.replace(self, serial_filter=frozenset(serial_numbers))

    @classmethod
    def from_env(cls, **overrides: Any) -> TempestConfig:
        """Create configuration from environment variables.

        Reads ``TEMPEST_BIND_ADDRESS``, ``TEMPEST_PORT``,
        ``TEMPEST_CACHE_ENABLED``, ``TEMPEST_SERIAL_FILTER`` (comma
        separated), ``TEMPEST_BUFFER_SIZE``, ``TEMPEST_QUEUE_SIZE`` and
        ``TEMPEST_DELIVERY_TIMEOUT``. Explicit keyword arguments override
        environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TempestConfig
            Populated configuration.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        address = env.get("TEMPEST_BIND_ADDRESS")
        if address is not None:
            config_kwargs["bind_address"] = address.strip()

        _ENV_INT_MAP = {
            "TEMPEST_PORT": "port",
            "TEMPEST_BUFFER_SIZE": "buffer_size",
            "TEMPEST_QUEUE_SIZE": "queue_size",
        }
        for env_key, field_name in _ENV_INT_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = int(val)
            except ValueError as exc:
                raise TempestConfigError(f"{env_key} must be an integer, got {val!r}") from exc

        timeout_env = env.get("TEMPEST_DELIVERY_TIMEOUT")
        if timeout_env is not None and "delivery_timeout" not in overrides:
            try:
                config_kwargs["delivery_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise TempestConfigError(f"TEMPEST_DELIVERY_TIMEOUT must be a number, got {timeout_env!r}") from exc

        if "cache_enabled" not in overrides:
            config_kwargs["cache_enabled"] = _env_bool(env.get("TEMPEST_CACHE_ENABLED"), False)

        filter_env = env.get("TEMPEST_SERIAL_FILTER")
        if filter_env is not None and "serial_filter" not in overrides:
            serials = _parse_serials(filter_env)
            config_kwargs["serial_filter"] = serials or None

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
