"""Ports (interfaces) for the ports-and-adapters architecture."""

from ip_tracker.domain.ports.geo_lookup import GeoLookup
from ip_tracker.domain.ports.message_sender import MessageSender

__all__ = [
    "GeoLookup",
    "MessageSender",
]
