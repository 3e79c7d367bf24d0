"""Notification use case: validate, enrich, format and deliver an alert."""

import logging
from typing import TYPE_CHECKING, Any

from ip_tracker.application.services.message_formatting import (
    compose_alert_message,
    format_utc7,
    strip_markdown,
)
from ip_tracker.domain.exceptions import ConfigurationError, EntityParseError, InvalidFieldError
from ip_tracker.domain.models import NotificationRequest

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from ip_tracker.domain.ports import GeoLookup, MessageSender

RICH_PARSE_MODE = "Markdown"

# (payload key, model field, error message), validated in this order
_REQUIRED_FIELDS = (
    ("ip", "ip", "Invalid IP address"),
    ("userAgent", "user_agent", "Invalid User Agent"),
    ("timestamp", "timestamp", "Invalid timestamp"),
)


def parse_notification_request(payload: Any) -> NotificationRequest:
    """Validate a decoded JSON request body.

    Raises:
        InvalidFieldError: For the first field that is missing, empty or not a string.
    """
    if not isinstance(payload, dict):
        payload = {}

    values: dict[str, str] = {}
    for key, field_name, message in _REQUIRED_FIELDS:
        value = payload.get(key)
        if not value or not isinstance(value, str):
            raise InvalidFieldError(key, message)
        values[field_name] = value
    return NotificationRequest(**values)


class NotificationService:
    """Sends one enriched alert per request.

    Delivery is attempted with Markdown first. Only an entity-parse rejection
    leads to the second, plain-text attempt; there is never a third one.
    """

    def __init__(self, geo_lookup: "GeoLookup", message_sender: "MessageSender") -> None:
        """Initialize with a geolocation lookup and a message sender."""
        self._geo_lookup = geo_lookup
        self._message_sender = message_sender

    async def build_message(self, request: NotificationRequest) -> str:
        """Enrich the request with geolocation data and render the alert text."""
        formatted_time = format_utc7(request.timestamp)
        geo = await self._geo_lookup.lookup(request.ip)
        if geo.is_empty:
            logger.info(f"No geolocation data for {request.ip}, sending alert without it")
        return compose_alert_message(request.ip, formatted_time, request.user_agent, geo)

    async def _deliver(self, message: str) -> None:
        try:
            await self._message_sender.send(message, parse_mode=RICH_PARSE_MODE)
        except EntityParseError as e:
            logger.info(f"Markdown parsing failed ({e.description}), retrying without parse_mode")
            await self._message_sender.send(strip_markdown(message), parse_mode=None)

    async def notify(self, request: NotificationRequest) -> None:
        """Deliver an alert for the request.

        Raises:
            ConfigurationError: The message sender has no credentials.
            DeliveryError: Delivery failed, including a failed plain-text retry.
        """
        if not self._message_sender.is_configured:
            raise ConfigurationError("Telegram configuration missing")

        message = await self.build_message(request)
        await self._deliver(message)
        logger.info(f"Alert for {request.ip} delivered")
