"""Device and hub status events."""

from __future__ import annotations

from typing import Any, ClassVar, Literal

from pytempest.exceptions import TempestUnexpectedValueError
from pytempest.models._base import EventKind, StationEvent, TempestEnum, TempestEvent, fmt, slot


class RadioStatus(TempestEnum):
    """Hub radio state (``radio_stats[3]``).

    ``UNKNOWN`` is never decoded from the wire; it marks a cached
    :class:`~pytempest.models.device.Hub` whose status code was out of range.
    """

    UNKNOWN = -1
    OFF = 0
    ON = 1
    ACTIVE = 3
    BLE_CONNECTED = 7

    @property
    def label(self) -> str:
        if self is RadioStatus.BLE_CONNECTED:
            return "BLE Connected"
        if self is RadioStatus.UNKNOWN:
            return "Unknown"
        return f"Radio {self.name.title()}"

    @classmethod
    def from_code(cls, code: Any, *, field: str = "") -> RadioStatus:
        status = super().from_code(code, field=field)
        if status is cls.UNKNOWN:
            # -1 is a cache marker, not a wire code
            raise TempestUnexpectedValueError(f"Unknown RadioStatus code: {code!r}", field=field, value=code)
        return status


class DeviceStatusEvent(StationEvent):
    """Periodic health report from a station (``device_status``)."""

    kind: ClassVar[EventKind] = EventKind.DEVICE_STATUS

    type: Literal["device_status"] = "device_status"
    timestamp: int
    uptime: int
    voltage: float
    firmware_revision: int
    rssi: int
    hub_rssi: int
    sensor_status: int
    debug: int = 0

    @property
    def battery_voltage(self) -> float:
        return self.voltage

    @property
    def debugging_enabled(self) -> bool:
        return self.debug != 0

    def __str__(self) -> str:
        return (
            f"DeviceStatusEvent (Timestamp: {self.timestamp}, Serial Number: {self.serial_number}, "
            f"Hub SN: {self.hub_sn}, Firmware Revision: {self.firmware_revision}, Uptime: {self.uptime}, "
            f"Battery Voltage: {self.voltage}V, RSSI: {self.rssi}, Hub RSSI: {self.hub_rssi}, "
            f"Debug Enabled: {self.debugging_enabled})"
        )


class HubStatusEvent(TempestEvent):
    """Periodic health report from a hub (``hub_status``).

    ``radio_stats`` layout: ``[version, reboot_count, i2c_bus_error_count,
    radio_status, radio_network_id]``.
    """

    kind: ClassVar[EventKind] = EventKind.HUB_STATUS

    type: Literal["hub_status"] = "hub_status"
    firmware_revision: str
    uptime: int
    rssi: int
    timestamp: int
    reset_flags: str
    seq: int
    fs: tuple[int, ...] | None = None
    radio_stats: tuple[int, ...]
    mqtt_stats: tuple[int, ...] = ()

    @property
    def radio_version(self) -> int:
        return slot(self.radio_stats, 0, field="radio_version", owner=type(self).__name__)

    @property
    def radio_reboot_count(self) -> int:
        return slot(self.radio_stats, 1, field="radio_reboot_count", owner=type(self).__name__)

    @property
    def radio_i2c_error_count(self) -> int:
        return slot(self.radio_stats, 2, field="radio_i2c_error_count", owner=type(self).__name__)

    @property
    def radio_status(self) -> RadioStatus:
        code = slot(self.radio_stats, 3, field="radio_status", owner=type(self).__name__)
        return RadioStatus.from_code(code, field="radio_status")

    @property
    def radio_network_id(self) -> int:
        return slot(self.radio_stats, 4, field="radio_network_id", owner=type(self).__name__)

    @property
    def reset_flag_tokens(self) -> list[str]:
        """``reset_flags`` split on commas (``"BOR,PIN,POR"`` -> three tokens).

        Unlike a plain ``split(",")``, tokens are stripped and empty ones dropped,
        so ``""`` yields ``[]``.
        """
        return [token.strip() for token in self.reset_flags.split(",") if token.strip()]

    def __str__(self) -> str:
        return (
            f"HubStatusEvent (Timestamp: {self.timestamp}, Serial Number: {self.serial_number}, "
            f"Firmware Revision: {self.firmware_revision}, Uptime: {self.uptime}, RSSI: {self.rssi}, "
            f'Reset Flags: "{self.reset_flags}", Radio Status: {fmt(self._safe("radio_status"))}, '
            f"Radio Network ID: {fmt(self._safe('radio_network_id'))})"
        )
