"""Datagram classification and decoding.

Each datagram is one UTF-8 JSON object whose ``type`` tag selects the
event model. Routing is an exact string match against :data:`EVENT_TYPES`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from pytempest.exceptions import TempestDecodeError, TempestUnknownEventError
from pytempest.models import (
    DeviceStatusEvent,
    Event,
    EventKind,
    HubStatusEvent,
    LightningStrikeEvent,
    ObservationAirEvent,
    ObservationEvent,
    ObservationSkyEvent,
    RainStartEvent,
    RapidWindEvent,
)

EVENT_TYPES: Mapping[str, type[Event]] = {
    EventKind.OBSERVATION: ObservationEvent,
    EventKind.AIR: ObservationAirEvent,
    EventKind.SKY: ObservationSkyEvent,
    EventKind.HUB_STATUS: HubStatusEvent,
    EventKind.RAPID_WIND: RapidWindEvent,
    EventKind.RAIN: RainStartEvent,
    EventKind.LIGHTNING: LightningStrikeEvent,
    EventKind.DEVICE_STATUS: DeviceStatusEvent,
}
"""Wire ``type`` tag to event model."""


def decode_event(value: Any) -> Event:
    """Decode an already-parsed JSON value into an event model.

    Raises
    ------
    TempestUnknownEventError
        If the ``type`` tag has no registered model.
    TempestDecodeError
        If *value* is not an object, has no string ``type`` tag, or does
        not match the shape of its model.
    """
    if not isinstance(value, dict):
        raise TempestDecodeError(f"Expected a JSON object, got {type(value).__name__}")

    event_type = value.get("type")
    if not isinstance(event_type, str):
        raise TempestDecodeError("Datagram has no string 'type' tag")

    model = EVENT_TYPES.get(event_type)
    if model is None:
        raise TempestUnknownEventError(f"Unknown event type: {event_type!r}", event_type=event_type)

    try:
        return model.model_validate(value)
    except ValidationError as exc:
        raise TempestDecodeError(
            f"Malformed {event_type} event: {exc.error_count()} validation error(s)",
            event_type=event_type,
        ) from exc


def decode_datagram(data: bytes) -> Event:
    """Parse one UTF-8 JSON datagram and decode it.

    Raises
    ------
    TempestDecodeError
        If *data* is not valid UTF-8 JSON, or for any reason listed in
        :func:`decode_event`.
    """
    try:
        value = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise TempestDecodeError(f"Datagram is not valid JSON: {exc}") from exc
    return decode_event(value)
