"""Data models for Tempest UDP events and cached devices."""

from typing import TypeAlias

from pytempest.models._base import EventKind, StationEvent, TempestBaseModel, TempestEnum, TempestEvent
from pytempest.models.device import Hub, RadioStats, Station
from pytempest.models.events import LightningStrikeEvent, RainStartEvent, RapidWindEvent
from pytempest.models.observation import (
    ObservationAirEvent,
    ObservationEvent,
    ObservationSkyEvent,
    PrecipitationType,
)
from pytempest.models.status import DeviceStatusEvent, HubStatusEvent, RadioStatus

Event: TypeAlias = (
    RainStartEvent
    | LightningStrikeEvent
    | RapidWindEvent
    | ObservationEvent
    | ObservationAirEvent
    | ObservationSkyEvent
    | DeviceStatusEvent
    | HubStatusEvent
)
"""Any decoded UDP event."""

__all__ = [
    "DeviceStatusEvent",
    "Event",
    "EventKind",
    "Hub",
    "HubStatusEvent",
    "LightningStrikeEvent",
    "ObservationAirEvent",
    "ObservationEvent",
    "ObservationSkyEvent",
    "PrecipitationType",
    "RadioStats",
    "RadioStatus",
    "RainStartEvent",
    "RapidWindEvent",
    "Station",
    "StationEvent",
    "TempestBaseModel",
    "TempestEnum",
    "TempestEvent",
]
