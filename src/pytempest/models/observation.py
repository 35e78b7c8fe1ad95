"""Periodic observation events: Tempest (``obs_st``), AIR and SKY.

Observations carry one row of positional measurements inside ``obs``.
Tempest and AIR rows are fully populated numbers; SKY rows may contain
``null`` for any slot, which reads back as ``None`` rather than zero.
"""

from __future__ import annotations

from typing import ClassVar, Literal

from pytempest.exceptions import TempestParseError
from pytempest.models._base import EventKind, StationEvent, TempestEnum, fmt, row_slot


class PrecipitationType(TempestEnum):
    """Precipitation type reported by the haptic rain sensor."""

    NONE = 0
    RAIN = 1
    HAIL = 2
    RAIN_HAIL = 3

    @property
    def label(self) -> str:
        if self is PrecipitationType.RAIN_HAIL:
            return "Rain + Hail (experimental)"
        return self.name.title()


def _measurement(index: int, name: str, doc: str | None = None) -> property:
    """Build a read-only property over slot *index* of the first ``obs`` row."""

    def getter(self: _Observation) -> float | None:
        return row_slot(self.obs, index, field=name, owner=type(self).__name__)

    return property(getter, doc=doc)


class _Observation(StationEvent):
    obs: tuple[tuple[float | None, ...], ...]
    firmware_revision: int

    @property
    def timestamp(self) -> int | None:
        value = row_slot(self.obs, 0, field="timestamp", owner=type(self).__name__)
        return None if value is None else int(value)


class ObservationEvent(_Observation):
    """Tempest all-in-one observation (``obs_st``)."""

    kind: ClassVar[EventKind] = EventKind.OBSERVATION

    type: Literal["obs_st"] = "obs_st"
    obs: tuple[tuple[float, ...], ...]

    wind_lull = _measurement(1, "wind_lull", "Minimum 3 second sample, m/s.")
    wind_avg = _measurement(2, "wind_avg", "Average over the report interval, m/s.")
    wind_gust = _measurement(3, "wind_gust", "Maximum 3 second sample, m/s.")
    wind_direction = _measurement(4, "wind_direction", "Degrees.")
    wind_sample_interval = _measurement(5, "wind_sample_interval", "Seconds.")
    station_pressure = _measurement(6, "station_pressure", "Millibars.")
    air_temperature = _measurement(7, "air_temperature", "Degrees Celsius.")
    relative_humidity = _measurement(8, "relative_humidity", "Percent.")
    illuminance = _measurement(9, "illuminance", "Lux.")
    uv = _measurement(10, "uv", "UV index.")
    solar_radiation = _measurement(11, "solar_radiation", "W/m^2.")
    rain_amount_prev_minute = _measurement(12, "rain_amount_prev_minute", "Millimetres over the previous minute.")
    lightning_avg_distance = _measurement(14, "lightning_avg_distance", "Kilometres.")
    lightning_strike_count = _measurement(15, "lightning_strike_count")
    battery_voltage = _measurement(16, "battery_voltage", "Volts.")
    report_interval = _measurement(17, "report_interval", "Minutes.")

    @property
    def precipitation_type(self) -> PrecipitationType:
        code = row_slot(self.obs, 13, field="precipitation_type", owner=type(self).__name__)
        return PrecipitationType.from_code(code, field="precipitation_type")

    def __str__(self) -> str:
        return (
            f"ObservationEvent (Timestamp: {fmt(self._safe('timestamp'))}, "
            f"Serial Number: {self.serial_number}, Hub SN: {self.hub_sn}, "
            f"Firmware Revision: {self.firmware_revision}, "
            f"Wind Lull: {fmt(self._safe('wind_lull'), ' m/s')}, "
            f"Wind Avg: {fmt(self._safe('wind_avg'), ' m/s')}, "
            f"Wind Gust: {fmt(self._safe('wind_gust'), ' m/s')}, "
            f"Wind Direction: {fmt(self._safe('wind_direction'), '°')}, "
            f"Station Pressure: {fmt(self._safe('station_pressure'), ' MB')}, "
            f"Air Temperature: {fmt(self._safe('air_temperature'), '°C')}, "
            f"Relative Humidity: {fmt(self._safe('relative_humidity'), '%')}, "
            f"Illuminance: {fmt(self._safe('illuminance'), ' lux')}, "
            f"UV: {fmt(self._safe('uv'))}, "
            f"Solar Radiation: {fmt(self._safe('solar_radiation'), ' W/m^2')}, "
            f"Rain Previous Minute: {fmt(self._safe('rain_amount_prev_minute'), ' mm')}, "
            f"Precipitation: {fmt(self._safe('precipitation_type'))}, "
            f"Lightning Strike Avg Distance: {fmt(self._safe('lightning_avg_distance'), ' km')}, "
            f"Lightning Strike Count: {fmt(self._safe('lightning_strike_count'))}, "
            f"Battery: {fmt(self._safe('battery_voltage'), 'V')})"
        )


class ObservationAirEvent(_Observation):
    """AIR module observation (``obs_air``)."""

    kind: ClassVar[EventKind] = EventKind.AIR

    type: Literal["obs_air"] = "obs_air"
    obs: tuple[tuple[float, ...], ...]

    station_pressure = _measurement(1, "station_pressure", "Millibars.")
    air_temperature = _measurement(2, "air_temperature", "Degrees Celsius.")
    relative_humidity = _measurement(3, "relative_humidity", "Percent.")
    lightning_strike_count = _measurement(4, "lightning_strike_count")
    lightning_avg_distance = _measurement(5, "lightning_avg_distance", "Kilometres.")
    battery_voltage = _measurement(6, "battery_voltage", "Volts.")
    report_interval = _measurement(7, "report_interval", "Minutes.")

    def __str__(self) -> str:
        return (
            f"ObservationAirEvent (Timestamp: {fmt(self._safe('timestamp'))}, "
            f"Serial Number: {self.serial_number}, Hub SN: {self.hub_sn}, "
            f"Firmware Revision: {self.firmware_revision}, "
            f"Station Pressure: {fmt(self._safe('station_pressure'), ' MB')}, "
            f"Air Temperature: {fmt(self._safe('air_temperature'), '°C')}, "
            f"Relative Humidity: {fmt(self._safe('relative_humidity'), '%')}, "
            f"Lightning Strike Count: {fmt(self._safe('lightning_strike_count'))}, "
            f"Lightning Strike Avg Distance: {fmt(self._safe('lightning_avg_distance'), ' km')}, "
            f"Battery Voltage: {fmt(self._safe('battery_voltage'), 'V')})"
        )


class ObservationSkyEvent(_Observation):
    """SKY module observation (``obs_sky``).

    Any slot may be ``null`` on the wire; the matching property then
    returns ``None``.
    """

    kind: ClassVar[EventKind] = EventKind.SKY

    type: Literal["obs_sky"] = "obs_sky"

    illuminance = _measurement(1, "illuminance", "Lux.")
    uv = _measurement(2, "uv", "UV index.")
    rain_amount_prev_minute = _measurement(3, "rain_amount_prev_minute", "Millimetres over the previous minute.")
    wind_lull = _measurement(4, "wind_lull", "Minimum 3 second sample, m/s.")
    wind_avg = _measurement(5, "wind_avg", "Average over the report interval, m/s.")
    wind_gust = _measurement(6, "wind_gust", "Maximum 3 second sample, m/s.")
    wind_direction = _measurement(7, "wind_direction", "Degrees.")
    battery_voltage = _measurement(8, "battery_voltage", "Volts.")
    report_interval = _measurement(9, "report_interval", "Minutes.")
    solar_radiation = _measurement(10, "solar_radiation", "W/m^2.")
    local_day_rain_accumulation = _measurement(11, "local_day_rain_accumulation", "Millimetres.")
    wind_sample_interval = _measurement(13, "wind_sample_interval", "Seconds.")

    @property
    def precipitation_type(self) -> PrecipitationType:
        code = row_slot(self.obs, 12, field="precipitation_type", owner=type(self).__name__)
        if code is None:
            raise TempestParseError("Unable to retrieve precipitation_type from ObservationSkyEvent", field="precipitation_type")
        return PrecipitationType.from_code(code, field="precipitation_type")

    def __str__(self) -> str:
        return (
            f"ObservationSkyEvent (Timestamp: {fmt(self._safe('timestamp'))}, "
            f"Serial Number: {self.serial_number}, Hub Serial Number: {self.hub_sn}, "
            f"Firmware Revision: {self.firmware_revision}, "
            f"Illuminance: {fmt(self._safe('illuminance'), ' lux')}, "
            f"UV: {fmt(self._safe('uv'))}, "
            f"Wind Avg: {fmt(self._safe('wind_avg'), ' m/s')}, "
            f"Battery: {fmt(self._safe('battery_voltage'), 'V')})"
        )
