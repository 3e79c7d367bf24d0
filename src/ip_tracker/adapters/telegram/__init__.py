"""Telegram Bot API adapter."""

from ip_tracker.adapters.telegram.telegram_message_sender import TelegramMessageSender

__all__ = ["TelegramMessageSender"]
