from __future__ import annotations

import threading
from typing import Any

import pytest

from pytempest.exceptions import TempestParseError
from pytempest.models import (
    DeviceStatusEvent,
    EventKind,
    HubStatusEvent,
    LightningStrikeEvent,
    ObservationAirEvent,
    ObservationEvent,
    ObservationSkyEvent,
    PrecipitationType,
    RadioStatus,
    RainStartEvent,
    RapidWindEvent,
)
from pytempest.state import STATION_MERGERS, StationCache
from pytempest.state._lock import ReadWriteLock


@pytest.fixture
def cache() -> StationCache:
    return StationCache()


# ------------------------------------------------------------------
# Hubs
# ------------------------------------------------------------------


def test_identical_hub_status_caches_one_hub(cache: StationCache, hub_status_payload: dict[str, Any]) -> None:
    event = HubStatusEvent.model_validate(hub_status_payload)
    cache.apply(event)
    cache.apply(event)

    assert cache.hub_count == 1
    hub = cache.get_hub_by_sn("HB-00013030")
    assert hub is not None
    assert hub.radio_stats.radio_status is RadioStatus.ACTIVE


def test_hub_is_replaced_wholesale(cache: StationCache, hub_status_payload: dict[str, Any]) -> None:
    cache.apply(HubStatusEvent.model_validate(hub_status_payload))
    cache.apply(HubStatusEvent.model_validate({**hub_status_payload, "seq": 49, "reset_flags": "WDG"}))

    hub = cache.get_hub_by_sn("HB-00013030")
    assert hub is not None
    assert hub.seq == 49
    assert hub.reset_flags == ("WDG",)
    assert cache.hub_count == 1


def test_truncated_radio_stats_leaves_cache_untouched(
    cache: StationCache, hub_status_payload: dict[str, Any]
) -> None:
    event = HubStatusEvent.model_validate({**hub_status_payload, "radio_stats": [2, 1]})
    with pytest.raises(TempestParseError):
        cache.apply(event)
    assert cache.hub_count == 0


def test_hub_from_station(
    cache: StationCache, hub_status_payload: dict[str, Any], observation_payload: dict[str, Any]
) -> None:
    cache.apply(HubStatusEvent.model_validate(hub_status_payload))
    cache.apply(ObservationEvent.model_validate(observation_payload))

    hub = cache.get_hub_from_station("ST-00000512")
    assert hub is not None
    assert hub.serial_number == "HB-00013030"
    assert cache.get_hub_from_station("ST-99999999") is None


# ------------------------------------------------------------------
# Stations
# ------------------------------------------------------------------


def test_two_observations_under_one_hub(cache: StationCache, observation_payload: dict[str, Any]) -> None:
    cache.apply(ObservationEvent.model_validate(observation_payload))
    cache.apply(ObservationEvent.model_validate({**observation_payload, "serial_number": "ST-00000513"}))

    assert cache.station_count == 2
    stations = cache.get_stations_by_hub_sn("HB-00013030")
    assert sorted(s.serial_number for s in stations) == ["ST-00000512", "ST-00000513"]
    assert cache.get_stations_by_hub_sn("HB-00000001") == []


def test_observation_projection(cache: StationCache, observation_payload: dict[str, Any]) -> None:
    cache.apply(ObservationEvent.model_validate(observation_payload))
    sn = "ST-00000512"

    assert cache.get_battery_voltage(sn) == pytest.approx(2.41)
    assert cache.get_wind_lull(sn) == pytest.approx(0.18)
    assert cache.get_wind_avg(sn) == pytest.approx(0.22)
    assert cache.get_wind_gust(sn) == pytest.approx(0.27)
    assert cache.get_wind_direction(sn) == 144
    assert cache.get_station_pressure(sn) == pytest.approx(1017.57)
    assert cache.get_air_temperature(sn) == pytest.approx(22.37)
    assert cache.get_relative_humidity(sn) == pytest.approx(50.26)
    assert cache.get_illuminance(sn) == 328
    assert cache.get_uv(sn) == pytest.approx(0.03)
    assert cache.get_solar_radiation(sn) == 3
    assert cache.get_rain_prev_min(sn) == 0
    assert cache.get_precipitation_type(sn) is PrecipitationType.NONE
    assert cache.get_lightning_avg_distance(sn) == 0
    assert cache.get_lightning_count(sn) == 0

    station = cache.get_station_by_sn(sn)
    assert station is not None
    assert station.firmware_revision == 129
    assert station.observation is not None
    assert cache.get_wind_speed(sn) is None


def test_rain_then_air_merges_into_one_station(
    cache: StationCache, rain_payload: dict[str, Any], air_payload: dict[str, Any]
) -> None:
    cache.apply(RainStartEvent.model_validate(rain_payload))
    cache.apply(ObservationAirEvent.model_validate({**air_payload, "serial_number": "ST-00000512"}))

    assert cache.station_count == 1
    station = cache.get_station_by_sn("ST-00000512")
    assert station is not None
    assert station.prev_rain_timestamp == 1493322445
    assert station.air_temperature == 10.0
    assert station.station_pressure == 835.0
    assert station.rain_event is not None
    assert station.air_event is not None
    assert cache.get_prev_rain_start("ST-00000512") == 1493322445


def test_new_rain_station_uses_event_hub(cache: StationCache, rain_payload: dict[str, Any]) -> None:
    cache.apply(RainStartEvent.model_validate(rain_payload))
    station = cache.get_station_by_sn("ST-00000512")
    assert station is not None
    assert station.hub_sn == "HB-00000001"


def test_rain_on_existing_station_updates_prev_rain_start(
    cache: StationCache, rain_payload: dict[str, Any]
) -> None:
    cache.apply(RainStartEvent.model_validate(rain_payload))
    cache.apply(RainStartEvent.model_validate({**rain_payload, "evt": [1493329999]}))
    assert cache.get_prev_rain_start("ST-00000512") == 1493329999


def test_lightning_getters(cache: StationCache, lightning_payload: dict[str, Any]) -> None:
    cache.apply(LightningStrikeEvent.model_validate(lightning_payload))
    sn = "ST-00000512"

    assert cache.get_lightning_energy(sn) == 3848
    assert cache.get_lightning_distance(sn) == 27
    assert cache.get_lightning_timestamp(sn) == 1493322445


def test_instant_event_only_replaces_its_slot(
    cache: StationCache, observation_payload: dict[str, Any], rapid_wind_payload: dict[str, Any]
) -> None:
    cache.apply(ObservationEvent.model_validate(observation_payload))
    cache.apply(RapidWindEvent.model_validate(rapid_wind_payload))

    sn = "ST-00000512"
    assert cache.get_wind_speed(sn) == pytest.approx(2.3)
    assert cache.get_wind_avg(sn) == pytest.approx(0.22)
    station = cache.get_station_by_sn(sn)
    assert station is not None
    assert station.hub_sn == "HB-00013030"


def test_observation_keeps_other_slots(
    cache: StationCache, observation_payload: dict[str, Any], rapid_wind_payload: dict[str, Any]
) -> None:
    cache.apply(RapidWindEvent.model_validate(rapid_wind_payload))
    cache.apply(ObservationEvent.model_validate(observation_payload))

    assert cache.get_wind_speed("ST-00000512") == pytest.approx(2.3)
    station = cache.get_station_by_sn("ST-00000512")
    assert station is not None
    assert station.hub_sn == "HB-00013030"


def test_sky_null_slot_projects_as_none(
    cache: StationCache, observation_payload: dict[str, Any], sky_payload: dict[str, Any]
) -> None:
    cache.apply(ObservationEvent.model_validate(observation_payload))
    row = list(sky_payload["obs"][0])
    row[1] = None
    cache.apply(ObservationSkyEvent.model_validate({**sky_payload, "serial_number": "ST-00000512", "obs": [row]}))

    sn = "ST-00000512"
    assert cache.get_illuminance(sn) is None
    assert cache.get_wind_avg(sn) == pytest.approx(4.6)
    # obs_sky carries no temperature
    assert cache.get_air_temperature(sn) == pytest.approx(22.37)
    station = cache.get_station_by_sn(sn)
    assert station is not None
    assert station.firmware_revision == 29


def test_failed_accessor_projects_as_none(cache: StationCache, observation_payload: dict[str, Any]) -> None:
    row = list(observation_payload["obs"][0])
    row[13] = 9
    cache.apply(ObservationEvent.model_validate({**observation_payload, "obs": [row[:14]]}))

    sn = "ST-00000512"
    assert cache.get_precipitation_type(sn) is None
    assert cache.get_battery_voltage(sn) is None
    assert cache.get_air_temperature(sn) == pytest.approx(22.37)


def test_device_status(cache: StationCache, device_status_payload: dict[str, Any]) -> None:
    cache.apply(DeviceStatusEvent.model_validate(device_status_payload))

    station = cache.get_station_by_sn("AR-00004049")
    assert station is not None
    assert station.battery_voltage == pytest.approx(3.5)
    assert station.firmware_revision == 17
    assert station.device_status is not None
    assert station.air_temperature is None


def test_unknown_station_getters_return_none(cache: StationCache) -> None:
    assert cache.get_station_by_sn("ST-00000512") is None
    assert cache.get_hub_by_sn("HB-00013030") is None
    assert cache.get_air_temperature("ST-00000512") is None
    assert cache.get_lightning_energy("ST-00000512") is None
    assert cache.get_prev_rain_start("ST-00000512") is None
    assert cache.hubs() == []
    assert cache.stations() == []


def test_returned_station_is_a_snapshot(cache: StationCache, observation_payload: dict[str, Any]) -> None:
    cache.apply(ObservationEvent.model_validate(observation_payload))
    before = cache.get_station_by_sn("ST-00000512")

    row = list(observation_payload["obs"][0])
    row[7] = 30.0
    cache.apply(ObservationEvent.model_validate({**observation_payload, "obs": [row]}))

    assert before is not None
    assert before.air_temperature == pytest.approx(22.37)
    assert cache.get_air_temperature("ST-00000512") == pytest.approx(30.0)


# ------------------------------------------------------------------
# Merge rules
# ------------------------------------------------------------------


def test_every_station_kind_has_a_merger() -> None:
    assert set(STATION_MERGERS) == set(EventKind) - {EventKind.HUB_STATUS}


def test_merger_does_not_mutate_current(
    observation_payload: dict[str, Any], lightning_payload: dict[str, Any]
) -> None:
    station = STATION_MERGERS[EventKind.OBSERVATION](None, ObservationEvent.model_validate(observation_payload))
    merged = STATION_MERGERS[EventKind.LIGHTNING](station, LightningStrikeEvent.model_validate(lightning_payload))

    assert station.lightning_event is None
    assert merged.lightning_event is not None
    assert merged.air_temperature == station.air_temperature


# ------------------------------------------------------------------
# ReadWriteLock
# ------------------------------------------------------------------


class TestReadWriteLock:
    def test_readers_share(self) -> None:
        lock = ReadWriteLock()
        with lock.read(), lock.read():
            pass

    def test_writer_excludes_readers(self) -> None:
        lock = ReadWriteLock()
        entered = threading.Event()

        def reader() -> None:
            with lock.read():
                entered.set()

        with lock.write():
            thread = threading.Thread(target=reader)
            thread.start()
            assert not entered.wait(0.05)

        assert entered.wait(1.0)
        thread.join(1.0)

    def test_readers_exclude_writer(self) -> None:
        lock = ReadWriteLock()
        entered = threading.Event()

        def writer() -> None:
            with lock.write():
                entered.set()

        with lock.read():
            thread = threading.Thread(target=writer)
            thread.start()
            assert not entered.wait(0.05)

        assert entered.wait(1.0)
        thread.join(1.0)
