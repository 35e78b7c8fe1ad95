"""In-memory cache of hubs and stations seen on the network.

:class:`StationCache` is the only component allowed to merge decoded events
into device records. Merging is delegated to the pure rules in
:mod:`pytempest.state.merge`; the cache only looks records up, stores the
result and guards both steps with one write critical section.

Records are frozen, so everything a getter returns is a stable snapshot
that stays valid after the lock is released.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from pytempest.models import Event, Hub, HubStatusEvent, PrecipitationType, Station
from pytempest.state._lock import ReadWriteLock
from pytempest.state.merge import STATION_MERGERS

_logger = logging.getLogger(__name__)

T = TypeVar("T")


class StationCache:
    """Keyed cache of :class:`Hub` and :class:`Station` records.

    At most one record exists per serial number and kind. Entries are
    never evicted.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._hubs: dict[str, Hub] = {}
        self._stations: dict[str, Station] = {}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def apply(self, event: Event) -> None:
        """Merge *event* into the cache.

        Raises
        ------
        TempestParseError
            If a hub status carries a truncated ``radio_stats`` array. The
            cache is left untouched.
        """
        if isinstance(event, HubStatusEvent):
            self.hub_upsert(Hub.from_event(event))
            return

        merger = STATION_MERGERS[event.kind]
        with self._lock.write():
            current = self._stations.get(event.serial_number)
            self._stations[event.serial_number] = merger(current, event)
        if current is None:
            _logger.debug("Cached new station %s (hub %s)", event.serial_number, event.hub_sn)

    def hub_upsert(self, hub: Hub) -> None:
        """Replace any hub with the same serial number by *hub*."""
        with self._lock.write():
            replaced = self._hubs.pop(hub.serial_number, None)
            self._hubs[hub.serial_number] = hub
        if replaced is None:
            _logger.debug("Cached new hub %s", hub.serial_number)
        else:
            _logger.debug("Replaced hub %s (seq %s -> %s)", hub.serial_number, replaced.seq, hub.seq)

    # ------------------------------------------------------------------
    # Collections
    # ------------------------------------------------------------------

    @property
    def hub_count(self) -> int:
        with self._lock.read():
            return len(self._hubs)

    @property
    def station_count(self) -> int:
        with self._lock.read():
            return len(self._stations)

    def hubs(self) -> list[Hub]:
        with self._lock.read():
            return list(self._hubs.values())

    def stations(self) -> list[Station]:
        with self._lock.read():
            return list(self._stations.values())

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_hub_by_sn(self, serial_number: str) -> Hub | None:
        with self._lock.read():
            return self._hubs.get(serial_number)

    def get_hub_from_station(self, station_sn: str) -> Hub | None:
        """Return the hub relaying *station_sn*, if both have been seen."""
        with self._lock.read():
            station = self._stations.get(station_sn)
            if station is None:
                return None
            return self._hubs.get(station.hub_sn)

    def get_station_by_sn(self, serial_number: str) -> Station | None:
        with self._lock.read():
            return self._stations.get(serial_number)

    def get_stations_by_hub_sn(self, hub_sn: str) -> list[Station]:
        with self._lock.read():
            return [station for station in self._stations.values() if station.hub_sn == hub_sn]

    def _station_value(self, serial_number: str, getter: Callable[[Station], T | None]) -> T | None:
        station = self.get_station_by_sn(serial_number)
        if station is None:
            return None
        return getter(station)

    # ------------------------------------------------------------------
    # Summary readings
    # ------------------------------------------------------------------

    def get_battery_voltage(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.battery_voltage)

    def get_wind_lull(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.wind_lull)

    def get_wind_avg(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.wind_avg)

    def get_wind_gust(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.wind_gust)

    def get_wind_direction(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.wind_direction)

    def get_station_pressure(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.station_pressure)

    def get_air_temperature(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.air_temperature)

    def get_relative_humidity(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.relative_humidity)

    def get_illuminance(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.illuminance)

    def get_uv(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.uv)

    def get_solar_radiation(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.solar_radiation)

    def get_rain_prev_min(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.rain_amount_prev_minute)

    def get_precipitation_type(self, serial_number: str) -> PrecipitationType | None:
        return self._station_value(serial_number, lambda s: s.precipitation_type)

    def get_lightning_avg_distance(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.lightning_strike_avg_distance)

    def get_lightning_count(self, serial_number: str) -> float | None:
        return self._station_value(serial_number, lambda s: s.lightning_strike_count)

    # ------------------------------------------------------------------
    # Readings from the latest raw event of a kind
    # ------------------------------------------------------------------

    def get_wind_speed(self, serial_number: str) -> float | None:
        """Speed from the latest rapid wind sample, m/s."""
        return self._station_value(serial_number, lambda s: _slot_value(s.wind_event, "wind_speed"))

    def get_prev_rain_start(self, serial_number: str) -> int | None:
        """Epoch seconds of the latest rain start."""

        def getter(station: Station) -> int | None:
            timestamp = _slot_value(station.rain_event, "timestamp")
            return station.prev_rain_timestamp if timestamp is None else timestamp

        return self._station_value(serial_number, getter)

    def get_lightning_timestamp(self, serial_number: str) -> int | None:
        return self._station_value(serial_number, lambda s: _slot_value(s.lightning_event, "timestamp"))

    def get_lightning_distance(self, serial_number: str) -> int | None:
        """Distance of the latest strike, km."""
        return self._station_value(serial_number, lambda s: _slot_value(s.lightning_event, "strike_distance"))

    def get_lightning_energy(self, serial_number: str) -> int | None:
        return self._station_value(serial_number, lambda s: _slot_value(s.lightning_event, "strike_energy"))


def _slot_value(event: Any, name: str) -> Any:
    if event is None:
        return None
    return event._safe(name)
