"""Adapters layer - external system integrations."""

from ip_tracker.adapters.config import AppConfig
from ip_tracker.adapters.ipwhois import IpWhoisGeoLookup
from ip_tracker.adapters.telegram import TelegramMessageSender

__all__ = [
    "AppConfig",
    "IpWhoisGeoLookup",
    "TelegramMessageSender",
]
