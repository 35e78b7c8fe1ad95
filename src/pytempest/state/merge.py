"""Pure merge rules from station events into cached :class:`Station` records.

Every rule has the signature ``(current, event) -> Station`` where
``current`` is the cached station for ``event.serial_number`` (or ``None``
when none exists yet). Rules never mutate ``current``; they return either
a fresh station or a ``model_copy`` with the patched fields.

Reading kinds (``obs_st``, ``obs_air``, ``obs_sky``, ``device_status``)
overwrite the summary fields they carry plus their raw slot. Instant kinds
(``rapid_wind``, ``evt_precip``, ``evt_strike``) only replace their raw slot.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from pytempest.models import EventKind, Station, StationEvent

StationMerger = Callable[[Station | None, Any], Station]

# Station field -> event property
_OBSERVATION_FIELDS: Mapping[str, str] = {
    "battery_voltage": "battery_voltage",
    "station_pressure": "station_pressure",
    "air_temperature": "air_temperature",
    "relative_humidity": "relative_humidity",
    "lightning_strike_count": "lightning_strike_count",
    "lightning_strike_avg_distance": "lightning_avg_distance",
    "illuminance": "illuminance",
    "uv": "uv",
    "rain_amount_prev_minute": "rain_amount_prev_minute",
    "wind_lull": "wind_lull",
    "wind_avg": "wind_avg",
    "wind_gust": "wind_gust",
    "wind_direction": "wind_direction",
    "solar_radiation": "solar_radiation",
    "precipitation_type": "precipitation_type",
}

_AIR_FIELDS: Mapping[str, str] = {
    "battery_voltage": "battery_voltage",
    "station_pressure": "station_pressure",
    "air_temperature": "air_temperature",
    "relative_humidity": "relative_humidity",
    "lightning_strike_count": "lightning_strike_count",
    "lightning_strike_avg_distance": "lightning_avg_distance",
}

_SKY_FIELDS: Mapping[str, str] = {
    "battery_voltage": "battery_voltage",
    "illuminance": "illuminance",
    "uv": "uv",
    "rain_amount_prev_minute": "rain_amount_prev_minute",
    "wind_lull": "wind_lull",
    "wind_avg": "wind_avg",
    "wind_gust": "wind_gust",
    "wind_direction": "wind_direction",
    "solar_radiation": "solar_radiation",
    "precipitation_type": "precipitation_type",
}

_DEVICE_STATUS_FIELDS: Mapping[str, str] = {
    "battery_voltage": "battery_voltage",
}


def project(event: StationEvent, fields: Mapping[str, str]) -> dict[str, Any]:
    """Read *fields* off *event*; unreadable slots project as ``None``."""
    return {station_field: event._safe(attr) for station_field, attr in fields.items()}


def _apply(current: Station | None, patch: dict[str, Any]) -> Station:
    if current is None:
        return Station(**patch)
    return current.model_copy(update=patch)


def _reading_merger(slot_name: str, fields: Mapping[str, str]) -> StationMerger:
    def merge(current: Station | None, event: Any) -> Station:
        patch = {
            "serial_number": event.serial_number,
            "hub_sn": event.hub_sn,
            "firmware_revision": event.firmware_revision,
            **project(event, fields),
            slot_name: event,
        }
        return _apply(current, patch)

    merge.__name__ = f"merge_{slot_name}"
    return merge


def _slot_merger(slot_name: str) -> StationMerger:
    def merge(current: Station | None, event: Any) -> Station:
        if current is not None:
            return current.model_copy(update={slot_name: event})
        return Station(serial_number=event.serial_number, hub_sn=event.hub_sn, **{slot_name: event})

    merge.__name__ = f"merge_{slot_name}"
    return merge


def merge_rain(current: Station | None, event: Any) -> Station:
    """Store a rain start; a new station also records ``prev_rain_timestamp``."""
    if current is not None:
        return current.model_copy(update={"rain_event": event})
    return Station(
        serial_number=event.serial_number,
        hub_sn=event.hub_sn,
        prev_rain_timestamp=event._safe("timestamp"),
        rain_event=event,
    )


STATION_MERGERS: Mapping[EventKind, StationMerger] = {
    EventKind.OBSERVATION: _reading_merger("observation", _OBSERVATION_FIELDS),
    EventKind.AIR: _reading_merger("air_event", _AIR_FIELDS),
    EventKind.SKY: _reading_merger("sky_event", _SKY_FIELDS),
    EventKind.DEVICE_STATUS: _reading_merger("device_status", _DEVICE_STATUS_FIELDS),
    EventKind.RAPID_WIND: _slot_merger("wind_event"),
    EventKind.RAIN: merge_rain,
    EventKind.LIGHTNING: _slot_merger("lightning_event"),
}
"""Merge rule per station event kind. ``hub_status`` is handled by the store."""
