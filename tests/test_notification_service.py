"""Tests for the notification use case and its delivery fallback."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from ip_tracker.application.services import (
    RICH_PARSE_MODE,
    NotificationService,
    parse_notification_request,
)
from ip_tracker.domain.exceptions import (
    ConfigurationError,
    DeliveryError,
    EntityParseError,
    InvalidFieldError,
)
from ip_tracker.domain.models import GeoInfo, NotificationRequest


@pytest.fixture
def notification_request() -> NotificationRequest:
    """Create a valid notification request."""
    return NotificationRequest(
        ip="203.0.113.7",
        user_agent="Mozilla/5.0 (X11; Linux x86_64)",
        timestamp="2024-01-01T00:00:00.000Z",
    )


@pytest.fixture
def geo_lookup() -> MagicMock:
    """Create a geolocation lookup returning enrichment data."""
    lookup = MagicMock()
    lookup.lookup = AsyncMock(
        return_value=GeoInfo(country_text="Germany (DE)", isp_text="Telekom / AS3320")
    )
    return lookup


@pytest.fixture
def message_sender() -> MagicMock:
    """Create a configured message sender that accepts every message."""
    sender = MagicMock()
    sender.is_configured = True
    sender.send = AsyncMock(return_value=None)
    return sender


class TestParseNotificationRequest:
    """Tests for request body validation."""

    def test_valid_payload_is_accepted(self) -> None:
        """Given all fields, when parsing, then a request model is returned."""
        request = parse_notification_request(
            {"ip": "192.0.2.1", "userAgent": "Agent", "timestamp": "2024-01-01T00:00:00Z"}
        )

        assert request == NotificationRequest(
            ip="192.0.2.1", user_agent="Agent", timestamp="2024-01-01T00:00:00Z"
        )

    @pytest.mark.parametrize(
        ("missing", "message"),
        [
            ("ip", "Invalid IP address"),
            ("userAgent", "Invalid User Agent"),
            ("timestamp", "Invalid timestamp"),
        ],
    )
    def test_each_missing_field_has_own_error(self, missing: str, message: str) -> None:
        """Given one missing field, when parsing, then a field-specific error is raised."""
        payload = {"ip": "192.0.2.1", "userAgent": "Agent", "timestamp": "2024-01-01T00:00:00Z"}
        del payload[missing]

        with pytest.raises(InvalidFieldError) as exc_info:
            parse_notification_request(payload)

        assert exc_info.value.field == missing
        assert exc_info.value.message == message

    def test_wrong_type_is_rejected(self) -> None:
        """Given a non-string user agent, when parsing, then it is rejected."""
        with pytest.raises(InvalidFieldError, match="Invalid User Agent"):
            parse_notification_request({"ip": "192.0.2.1", "userAgent": 42, "timestamp": "t"})

    def test_empty_string_is_rejected(self) -> None:
        """Given an empty timestamp, when parsing, then it is rejected."""
        with pytest.raises(InvalidFieldError, match="Invalid timestamp"):
            parse_notification_request({"ip": "192.0.2.1", "userAgent": "Agent", "timestamp": ""})

    def test_non_object_payload_reports_ip_first(self) -> None:
        """Given a JSON list, when parsing, then the IP field is reported first."""
        with pytest.raises(InvalidFieldError, match="Invalid IP address"):
            parse_notification_request(["192.0.2.1"])


class TestNotify:
    """Tests for NotificationService.notify."""

    @pytest.mark.asyncio
    async def test_when_not_configured_then_raises_before_any_call(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
    ) -> None:
        """Given no credentials, when notifying, then ConfigurationError is raised and nothing is called."""
        message_sender.is_configured = False
        service = NotificationService(geo_lookup, message_sender)

        with pytest.raises(ConfigurationError, match="Telegram configuration missing"):
            await service.notify(notification_request)

        geo_lookup.lookup.assert_not_awaited()
        message_sender.send.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_when_delivery_succeeds_then_sends_once_with_markdown(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
    ) -> None:
        """Given a working sender, when notifying, then one Markdown message is sent."""
        service = NotificationService(geo_lookup, message_sender)

        await service.notify(notification_request)

        geo_lookup.lookup.assert_awaited_once_with("203.0.113.7")
        message_sender.send.assert_awaited_once()
        text = message_sender.send.await_args.args[0]
        assert message_sender.send.await_args.kwargs["parse_mode"] == RICH_PARSE_MODE
        assert "`203.0.113.7`" in text
        assert "🌎 **Country:** Germany \\(DE\\)" in text
        assert "🏷 **ISP:** Telekom / AS3320" in text
        assert "01/01/2024 07:00:00 UTC+7" in text
        assert "Mozilla/5.0 \\(X11; Linux x86\\_64\\)" in text

    @pytest.mark.asyncio
    async def test_when_enrichment_empty_then_message_still_sent_without_geo_lines(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
    ) -> None:
        """Given an empty geolocation result, when notifying, then the alert is sent without country and ISP."""
        geo_lookup.lookup.return_value = GeoInfo()
        service = NotificationService(geo_lookup, message_sender)

        await service.notify(notification_request)

        text = message_sender.send.await_args.args[0]
        assert "Country" not in text
        assert "ISP" not in text

    @pytest.mark.asyncio
    async def test_when_enrichment_empty_then_logs_missing_geolocation(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Given an empty geolocation result, when notifying, then the missing enrichment is logged."""
        geo_lookup.lookup.return_value = GeoInfo()
        service = NotificationService(geo_lookup, message_sender)

        with caplog.at_level(logging.INFO, logger="ip_tracker.application.services.notification_service"):
            await service.notify(notification_request)

        assert "No geolocation data for 203.0.113.7" in caplog.text

    @pytest.mark.asyncio
    async def test_when_enrichment_present_then_no_missing_geolocation_log(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Given geolocation data, when notifying, then no missing-enrichment message is logged."""
        service = NotificationService(geo_lookup, message_sender)

        with caplog.at_level(logging.INFO, logger="ip_tracker.application.services.notification_service"):
            await service.notify(notification_request)

        assert "No geolocation data" not in caplog.text

    @pytest.mark.asyncio
    async def test_when_entity_parse_fails_then_retries_once_as_plain_text(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
    ) -> None:
        """Given an entity-parse rejection, when notifying, then one plain-text retry is sent."""
        message_sender.send.side_effect = [
            EntityParseError("Bad Request: can't parse entities", status_code=400),
            None,
        ]
        service = NotificationService(geo_lookup, message_sender)

        await service.notify(notification_request)

        assert message_sender.send.await_count == 2
        retry = message_sender.send.await_args_list[1]
        assert retry.kwargs["parse_mode"] is None
        assert "*" not in retry.args[0]
        assert "`" not in retry.args[0]
        assert "IP Address: 203.0.113.7" in retry.args[0]

    @pytest.mark.asyncio
    async def test_when_retry_also_fails_then_raises_without_third_attempt(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
    ) -> None:
        """Given two entity-parse rejections, when notifying, then the error surfaces after two attempts."""
        message_sender.send.side_effect = [
            EntityParseError("can't parse entities", status_code=400),
            EntityParseError("can't parse entities", status_code=400),
            None,
        ]
        service = NotificationService(geo_lookup, message_sender)

        with pytest.raises(DeliveryError):
            await service.notify(notification_request)

        assert message_sender.send.await_count == 2

    @pytest.mark.asyncio
    async def test_when_other_delivery_error_then_no_retry(
        self,
        notification_request: NotificationRequest,
        geo_lookup: MagicMock,
        message_sender: MagicMock,
    ) -> None:
        """Given a non-parse delivery failure, when notifying, then it surfaces without retry."""
        message_sender.send.side_effect = DeliveryError("Unauthorized", status_code=401)
        service = NotificationService(geo_lookup, message_sender)

        with pytest.raises(DeliveryError, match="Unauthorized"):
            await service.notify(notification_request)

        message_sender.send.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unparsable_timestamp_is_used_verbatim(
        self, geo_lookup: MagicMock, message_sender: MagicMock
    ) -> None:
        """Given a bad timestamp, when notifying, then the message carries it unchanged."""
        request = NotificationRequest(ip="192.0.2.1", user_agent="Agent", timestamp="soon")
        service = NotificationService(geo_lookup, message_sender)

        await service.notify(request)

        assert "🕐 **Time:** soon" in message_sender.send.await_args.args[0]
