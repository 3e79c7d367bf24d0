"""Domain layer - core models, ports and errors."""

from ip_tracker.domain.exceptions import (
    ConfigurationError,
    DeliveryError,
    EntityParseError,
    InvalidFieldError,
    IpTrackerError,
)
from ip_tracker.domain.models import (
    ForwardingHeaders,
    GeoInfo,
    NotificationRequest,
    ResolvedIdentity,
)
from ip_tracker.domain.ports import GeoLookup, MessageSender

__all__ = [
    "ConfigurationError",
    "DeliveryError",
    "EntityParseError",
    "ForwardingHeaders",
    "GeoInfo",
    "GeoLookup",
    "InvalidFieldError",
    "IpTrackerError",
    "MessageSender",
    "NotificationRequest",
    "ResolvedIdentity",
]
