"""Application services (use cases) for resolving clients and sending alerts."""

from ip_tracker.application.services.ip_resolution_service import (
    DEVELOPMENT_FALLBACK_IP,
    IP_HEADER_RULES,
    resolve_client_identity,
)
from ip_tracker.application.services.message_formatting import (
    compose_alert_message,
    escape_markdown,
    format_utc7,
    strip_markdown,
)
from ip_tracker.application.services.notification_service import (
    RICH_PARSE_MODE,
    NotificationService,
    parse_notification_request,
)

__all__ = [
    "DEVELOPMENT_FALLBACK_IP",
    "IP_HEADER_RULES",
    "RICH_PARSE_MODE",
    "NotificationService",
    "compose_alert_message",
    "escape_markdown",
    "format_utc7",
    "parse_notification_request",
    "resolve_client_identity",
    "strip_markdown",
]
