"""Utility for logging outbound API requests when IPT_LOG_REQUESTS is enabled."""

import json
import logging
import os
import re
from typing import Any

logger = logging.getLogger(__name__)

_BOT_TOKEN_PATTERN = re.compile(r"/bot[^/]+/")


def should_log_requests() -> bool:
    """Check if request logging is enabled via IPT_LOG_REQUESTS environment variable."""
    return os.getenv("IPT_LOG_REQUESTS", "").lower() == "true"


def redact_url(url: str) -> str:
    """Hide the bot token embedded in Telegram Bot API URLs."""
    return _BOT_TOKEN_PATTERN.sub("/bot***REDACTED***/", url)


def _format_payload(payload: Any) -> str:
    """Format payload for logging."""
    try:
        return json.dumps(payload, indent=2, ensure_ascii=False) if isinstance(payload, dict) else str(payload)
    except (TypeError, ValueError):
        return str(payload)


def log_api_request(method: str, url: str, payload: Any = None) -> None:
    """Log API request details if IPT_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL, secrets in the path are redacted.
        payload: Request payload/body (optional).
    """
    if not should_log_requests():
        return

    log_parts = [f"{method} {redact_url(url)}"]

    if payload is not None:
        log_parts.append(f"Payload: {_format_payload(payload)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
