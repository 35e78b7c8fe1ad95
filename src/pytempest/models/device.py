"""Cached device records: hubs and stations.

Both are frozen; the cache replaces a record rather than mutating it,
so a record handed to a reader is a stable snapshot.
"""

from __future__ import annotations

import logging

from pytempest.exceptions import TempestUnexpectedValueError
from pytempest.models._base import TempestBaseModel
from pytempest.models.events import LightningStrikeEvent, RainStartEvent, RapidWindEvent
from pytempest.models.observation import (
    ObservationAirEvent,
    ObservationEvent,
    ObservationSkyEvent,
    PrecipitationType,
)
from pytempest.models.status import DeviceStatusEvent, HubStatusEvent, RadioStatus

_logger = logging.getLogger(__name__)


class RadioStats(TempestBaseModel):
    """Radio subsystem counters from a hub status report."""

    version: int
    reboot_count: int
    i2c_bus_error_count: int
    radio_status: RadioStatus
    radio_network_id: int


class Hub(TempestBaseModel):
    """General hub information, rebuilt from every ``hub_status`` event."""

    serial_number: str
    firmware_revision: str
    uptime: int
    rssi: int
    timestamp: int
    reset_flags: tuple[str, ...]
    seq: int
    fs: tuple[int, ...] | None = None
    radio_stats: RadioStats
    mqtt_stats: tuple[int, ...] = ()

    @classmethod
    def from_event(cls, event: HubStatusEvent) -> Hub:
        """Build a hub from a status report.

        Raises
        ------
        TempestParseError
            If ``radio_stats`` is shorter than its five documented slots.
        """
        try:
            radio_status = event.radio_status
        except TempestUnexpectedValueError as exc:
            _logger.warning("Hub %s reported unknown radio status %r", event.serial_number, exc.value)
            radio_status = RadioStatus.UNKNOWN

        return cls(
            serial_number=event.serial_number,
            firmware_revision=event.firmware_revision,
            uptime=event.uptime,
            rssi=event.rssi,
            timestamp=event.timestamp,
            reset_flags=tuple(event.reset_flag_tokens),
            seq=event.seq,
            fs=event.fs,
            radio_stats=RadioStats(
                version=event.radio_version,
                reboot_count=event.radio_reboot_count,
                i2c_bus_error_count=event.radio_i2c_error_count,
                radio_status=radio_status,
                radio_network_id=event.radio_network_id,
            ),
            mqtt_stats=event.mqtt_stats,
        )

    def __str__(self) -> str:
        return (
            f"Hub (Serial Number: {self.serial_number}, Firmware Revision: {self.firmware_revision}, "
            f"Uptime: {self.uptime}, RSSI: {self.rssi}, Timestamp: {self.timestamp}, "
            f"Reset Flags: {list(self.reset_flags)}, Seq: {self.seq}, "
            f"Radio Status: {self.radio_stats.radio_status}, Network ID: {self.radio_stats.radio_network_id})"
        )


class Station(TempestBaseModel):
    """Merged view of a sensor station.

    Summary readings are ``None`` until an event kind that carries them
    has been seen. The seven ``*_event`` slots hold the most recent raw
    event of each kind.
    """

    serial_number: str
    hub_sn: str
    firmware_revision: int | None = None
    battery_voltage: float | None = None

    air_temperature: float | None = None
    station_pressure: float | None = None
    relative_humidity: float | None = None
    lightning_strike_count: float | None = None
    lightning_strike_avg_distance: float | None = None
    illuminance: float | None = None
    uv: float | None = None
    rain_amount_prev_minute: float | None = None
    prev_rain_timestamp: int | None = None
    wind_lull: float | None = None
    wind_avg: float | None = None
    wind_gust: float | None = None
    wind_direction: float | None = None
    solar_radiation: float | None = None
    precipitation_type: PrecipitationType | None = None

    observation: ObservationEvent | None = None
    wind_event: RapidWindEvent | None = None
    rain_event: RainStartEvent | None = None
    lightning_event: LightningStrikeEvent | None = None
    air_event: ObservationAirEvent | None = None
    sky_event: ObservationSkyEvent | None = None
    device_status: DeviceStatusEvent | None = None
