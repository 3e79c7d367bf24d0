"""Starlette application factory."""

import logging
from typing import TYPE_CHECKING

from starlette.applications import Starlette
from starlette.routing import Route

from ip_tracker.adapters.config import AppConfig
from ip_tracker.adapters.ipwhois import IpWhoisGeoLookup
from ip_tracker.adapters.telegram import TelegramMessageSender
from ip_tracker.application.services import NotificationService

from .handlers import get_ip, send_telegram

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)


def create_notification_service(config: AppConfig, session: "ClientSession") -> NotificationService:
    """Wire the notification service to the ipwho.is and Telegram adapters."""
    geo_lookup = IpWhoisGeoLookup(
        session=session,
        base_url=config.geo_lookup_base_url,
        timeout_seconds=config.geo_lookup_timeout_seconds,
    )
    message_sender = TelegramMessageSender(
        session=session,
        bot_token=config.telegram_bot_token,
        chat_id=config.telegram_chat_id,
        api_base_url=config.telegram_api_base_url,
    )
    return NotificationService(geo_lookup, message_sender)


def create_app(
    config: AppConfig,
    session: "ClientSession",
    notification_service: NotificationService | None = None,
) -> Starlette:
    """Build the HTTP application.

    Args:
        config: Application configuration.
        session: Shared aiohttp session for outbound calls.
        notification_service: Prebuilt service, mainly for tests. Built from config when omitted.
    """
    if not isinstance(config, AppConfig):
        raise TypeError("config must be an AppConfig instance")

    if not config.telegram_configured:
        logger.warning(
            "TELEGRAM_BOT_TOKEN or TELEGRAM_CHAT_ID is not set, alert requests will fail"
        )

    app = Starlette(
        routes=[
            Route("/api/get-ip", get_ip, methods=["GET"]),
            Route("/api/send-telegram", send_telegram, methods=["POST"]),
        ],
    )
    app.state.notification_service = notification_service or create_notification_service(
        config, session
    )
    return app
