"""State/cache layer.

This package is the single place where decoded events are merged into
per-device hub and station records.
"""

from pytempest.state.merge import STATION_MERGERS
from pytempest.state.store import StationCache

__all__ = ["STATION_MERGERS", "StationCache"]
