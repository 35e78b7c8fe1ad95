"""Instantaneous station events: rain start, lightning strike, rapid wind."""

from __future__ import annotations

from typing import ClassVar, Literal

from pytempest.models._base import EventKind, StationEvent, fmt, slot


class RainStartEvent(StationEvent):
    """Rain start detected by a station (``evt_precip``).

    ``evt`` layout: ``[timestamp]``.
    """

    kind: ClassVar[EventKind] = EventKind.RAIN

    type: Literal["evt_precip"] = "evt_precip"
    evt: tuple[int, ...]

    @property
    def timestamp(self) -> int:
        return slot(self.evt, 0, field="timestamp", owner=type(self).__name__)

    def __str__(self) -> str:
        return (
            f"RainStartEvent (Timestamp: {fmt(self._safe('timestamp'))}, "
            f"Serial Number: {self.serial_number}, Hub Serial Number: {self.hub_sn})"
        )


class LightningStrikeEvent(StationEvent):
    """Lightning strike detected by a station (``evt_strike``).

    ``evt`` layout: ``[timestamp, distance_km, energy]``.
    """

    kind: ClassVar[EventKind] = EventKind.LIGHTNING

    type: Literal["evt_strike"] = "evt_strike"
    evt: tuple[int, ...]

    @property
    def timestamp(self) -> int:
        return slot(self.evt, 0, field="timestamp", owner=type(self).__name__)

    @property
    def strike_distance(self) -> int:
        """Strike distance in kilometres."""
        return slot(self.evt, 1, field="strike_distance", owner=type(self).__name__)

    @property
    def strike_energy(self) -> int:
        """Strike energy (unitless, as reported by the sensor)."""
        return slot(self.evt, 2, field="strike_energy", owner=type(self).__name__)

    def __str__(self) -> str:
        return (
            f"LightningStrikeEvent (Timestamp: {fmt(self._safe('timestamp'))}, "
            f"Serial Number: {self.serial_number}, Hub Serial Number: {self.hub_sn}, "
            f"Strike Distance: {fmt(self._safe('strike_distance'), ' km')}, "
            f"Energy: {fmt(self._safe('strike_energy'))})"
        )


class RapidWindEvent(StationEvent):
    """Rapid (3 second) wind sample (``rapid_wind``).

    ``ob`` layout: ``[timestamp, speed_mps, direction_deg]``.
    """

    kind: ClassVar[EventKind] = EventKind.RAPID_WIND

    type: Literal["rapid_wind"] = "rapid_wind"
    ob: tuple[float, ...]

    @property
    def timestamp(self) -> int:
        return int(slot(self.ob, 0, field="timestamp", owner=type(self).__name__))

    @property
    def wind_speed(self) -> float:
        """Wind speed in metres per second."""
        return slot(self.ob, 1, field="wind_speed", owner=type(self).__name__)

    @property
    def wind_direction(self) -> int:
        """Wind direction in degrees, ``0 <= direction < 360``."""
        return int(slot(self.ob, 2, field="wind_direction", owner=type(self).__name__)) % 360

    def __str__(self) -> str:
        return (
            f"RapidWindEvent (Timestamp: {fmt(self._safe('timestamp'))}, "
            f"Serial Number: {self.serial_number}, Hub Serial Number: {self.hub_sn}, "
            f"Wind Speed: {fmt(self._safe('wind_speed'), ' m/s')}, "
            f"Wind Direction: {fmt(self._safe('wind_direction'), '°')})"
        )
