"""Domain models for the IP tracker."""

from ip_tracker.domain.models.geo_info import GeoInfo
from ip_tracker.domain.models.notification_request import NotificationRequest
from ip_tracker.domain.models.resolved_identity import ForwardingHeaders, ResolvedIdentity

__all__ = [
    "ForwardingHeaders",
    "GeoInfo",
    "NotificationRequest",
    "ResolvedIdentity",
]
