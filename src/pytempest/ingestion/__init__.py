"""Ingestion layer.

Turns raw hub datagrams into typed event models.
"""

from pytempest.ingestion.dispatch import EVENT_TYPES, decode_datagram, decode_event

__all__ = ["EVENT_TYPES", "decode_datagram", "decode_event"]
