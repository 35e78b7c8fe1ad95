"""Shared Tempest datagram payloads, as broadcast by a hub."""

from __future__ import annotations

from typing import Any

import pytest


@pytest.fixture
def hub_status_payload() -> dict[str, Any]:
    return {
        "serial_number": "HB-00013030",
        "type": "hub_status",
        "firmware_revision": "35",
        "uptime": 1670133,
        "rssi": -62,
        "timestamp": 1495724691,
        "reset_flags": "BOR,PIN,POR",
        "seq": 48,
        "fs": [1, 0, 15675411, 524288],
        "radio_stats": [2, 1, 0, 3, 2839],
        "mqtt_stats": [1, 0],
    }


@pytest.fixture
def observation_payload() -> dict[str, Any]:
    return {
        "serial_number": "ST-00000512",
        "type": "obs_st",
        "hub_sn": "HB-00013030",
        "obs": [
            [1588948614, 0.18, 0.22, 0.27, 144, 6, 1017.57, 22.37, 50.26, 328, 0.03, 3, 0.000000, 0, 0, 0, 2.410, 1]
        ],
        "firmware_revision": 129,
    }


@pytest.fixture
def rain_payload() -> dict[str, Any]:
    return {
        "serial_number": "ST-00000512",
        "type": "evt_precip",
        "hub_sn": "HB-00000001",
        "evt": [1493322445],
    }


@pytest.fixture
def lightning_payload() -> dict[str, Any]:
    return {
        "serial_number": "ST-00000512",
        "type": "evt_strike",
        "hub_sn": "HB-00000001",
        "evt": [1493322445, 27, 3848],
    }


@pytest.fixture
def rapid_wind_payload() -> dict[str, Any]:
    return {
        "serial_number": "ST-00000512",
        "type": "rapid_wind",
        "hub_sn": "HB-00000001",
        "ob": [1493322445, 2.3, 128],
    }


@pytest.fixture
def air_payload() -> dict[str, Any]:
    return {
        "serial_number": "AR-00004049",
        "type": "obs_air",
        "hub_sn": "HB-00000001",
        "obs": [[1493164835, 835.0, 10.0, 45, 0, 0, 3.46, 1]],
        "firmware_revision": 17,
    }


@pytest.fixture
def sky_payload() -> dict[str, Any]:
    return {
        "serial_number": "SK-00008453",
        "type": "obs_sky",
        "hub_sn": "HB-00000001",
        "obs": [[1493321340, 9000, 10, 0.0, 2.6, 4.6, 7.4, 187, 3.12, 1, 130, None, 0, 3]],
        "firmware_revision": 29,
    }


@pytest.fixture
def device_status_payload() -> dict[str, Any]:
    return {
        "serial_number": "AR-00004049",
        "type": "device_status",
        "hub_sn": "HB-00000001",
        "timestamp": 1510855923,
        "uptime": 2189,
        "voltage": 3.50,
        "firmware_revision": 17,
        "rssi": -17,
        "hub_rssi": -87,
        "sensor_status": 0,
        "debug": 0,
    }
