"""pytempest - Async Python listener for WeatherFlow Tempest UDP broadcasts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pytempest")
except PackageNotFoundError:
    __version__ = "0+local"
from pytempest.config import TempestConfig
from pytempest.exceptions import (
    TempestConfigError,
    TempestDecodeError,
    TempestDeliveryError,
    TempestError,
    TempestFieldError,
    TempestParseError,
    TempestTransportError,
    TempestUnexpectedValueError,
    TempestUnknownEventError,
)
from pytempest.listener import TempestListener, listen_udp, listen_udp_subscribe, listen_udp_with_cache
from pytempest.models import (
    DeviceStatusEvent,
    Event,
    EventKind,
    Hub,
    HubStatusEvent,
    LightningStrikeEvent,
    ObservationAirEvent,
    ObservationEvent,
    ObservationSkyEvent,
    PrecipitationType,
    RadioStats,
    RadioStatus,
    RainStartEvent,
    RapidWindEvent,
    Station,
)
from pytempest.state import StationCache
from pytempest.stream import EventStream

__all__ = [
    "__version__",
    "DeviceStatusEvent",
    "Event",
    "EventKind",
    "EventStream",
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
    "StationCache",
    "TempestConfig",
    "TempestConfigError",
    "TempestDecodeError",
    "TempestDeliveryError",
    "TempestError",
    "TempestFieldError",
    "TempestListener",
    "TempestParseError",
    "TempestTransportError",
    "TempestUnexpectedValueError",
    "TempestUnknownEventError",
    "listen_udp",
    "listen_udp_subscribe",
    "listen_udp_with_cache",
]
