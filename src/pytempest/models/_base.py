"""Base model, enums and positional-slot helpers for Tempest UDP events.

Every Tempest event model inherits from :class:`TempestEvent` which
provides:

* ``frozen=True`` so decoded events (and the cache records holding them)
  can be shared between the receive loop and readers without copying.
* ``extra="ignore"`` so fields added to the wire format by newer hub
  firmware do not break decoding.
* A ``kind`` class variable naming the event variant.

Measurement arrays are positional on the wire (``[timestamp, v1, v2, ...]``).
:func:`slot` and :func:`row_slot` turn an out-of-bounds read into a single
:class:`~pytempest.exceptions.TempestParseError`.

Coded enums inherit from :class:`TempestEnum`, whose :meth:`TempestEnum.from_code`
raises :class:`~pytempest.exceptions.TempestUnexpectedValueError` for codes
without a mapped member instead of falling back to a default.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from enum import StrEnum
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict

from pytempest.exceptions import TempestParseError, TempestUnexpectedValueError

T = TypeVar("T")
TEnum = TypeVar("TEnum", bound="TempestEnum")


class EventKind(StrEnum):
    """Event variants, valued by their wire ``type`` tag."""

    RAIN = "evt_precip"
    LIGHTNING = "evt_strike"
    RAPID_WIND = "rapid_wind"
    OBSERVATION = "obs_st"
    AIR = "obs_air"
    SKY = "obs_sky"
    DEVICE_STATUS = "device_status"
    HUB_STATUS = "hub_status"


class TempestEnum(enum.IntEnum):
    """Base for enums decoded from small integer wire codes."""

    @property
    def label(self) -> str:
        return self.name.replace("_", " ").title()

    def __str__(self) -> str:
        return self.label

    @classmethod
    def from_code(cls: type[TEnum], code: Any, *, field: str = "") -> TEnum:
        """Decode *code* into a member.

        Raises
        ------
        TempestUnexpectedValueError
            If *code* is not an integral number or has no mapped member.
        """
        if isinstance(code, bool) or not isinstance(code, (int, float)):
            raise TempestUnexpectedValueError(f"{cls.__name__} code is not numeric: {code!r}", field=field, value=code)
        if isinstance(code, float) and not code.is_integer():
            raise TempestUnexpectedValueError(f"{cls.__name__} code is not integral: {code!r}", field=field, value=code)
        try:
            return cls(int(code))
        except ValueError as exc:
            raise TempestUnexpectedValueError(f"Unknown {cls.__name__} code: {code!r}", field=field, value=code) from exc


def slot(values: Sequence[T], index: int, *, field: str, owner: str) -> T:
    """Return ``values[index]`` or raise :class:`TempestParseError`."""
    if index >= len(values):
        raise TempestParseError(f"Unable to retrieve {field} from {owner}", field=field)
    return values[index]


def row_slot(rows: Sequence[Sequence[T]], index: int, *, field: str, owner: str) -> T:
    """Return slot *index* of the first observation row.

    Observation payloads wrap their measurements in an outer array
    (``"obs": [[...]]``); a missing row and a short row are both
    reported as :class:`TempestParseError`.
    """
    if not rows:
        raise TempestParseError(f"Unable to retrieve {field} from {owner}: no observation row", field=field)
    return slot(rows[0], index, field=field, owner=owner)


def fmt(value: Any, unit: str = "") -> str:
    """Format an optional reading for event summaries."""
    if value is None:
        return "n/a"
    return f"{value}{unit}"


class TempestBaseModel(BaseModel):
    """Base for frozen Tempest records."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )


class TempestEvent(TempestBaseModel):
    """Base for every decoded UDP event."""

    kind: ClassVar[EventKind]

    type: str
    serial_number: str

    def _safe(self, name: str) -> Any:
        """Read property *name* for display, ``None`` on field errors."""
        try:
            return getattr(self, name)
        except (TempestParseError, TempestUnexpectedValueError):
            return None


class StationEvent(TempestEvent):
    """Event emitted by a sensor station and relayed by a hub."""

    hub_sn: str
