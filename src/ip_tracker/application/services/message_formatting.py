"""Formatting helpers for Telegram alert messages (legacy Markdown dialect)."""

import logging
from datetime import UTC, datetime, timedelta

from ip_tracker.domain.models import GeoInfo

logger = logging.getLogger(__name__)

UTC7_OFFSET = timedelta(hours=7)

# Backslash must stay first so escapes inserted later are not escaped again.
# "+ - = . !" do not break the Markdown parser and are left alone.
MARKDOWN_SPECIAL_CHARACTERS = ("\\", "*", "_", "[", "]", "(", ")", "~", "`", ">", "#", "|", "{", "}")

# Emphasis markers removed (not escaped) when falling back to plain text.
MARKDOWN_EMPHASIS_MARKERS = ("**", "*", "`")


def escape_markdown(text: str) -> str:
    """Backslash-escape characters that would be read as Markdown markup."""
    if not text:
        return ""
    for char in MARKDOWN_SPECIAL_CHARACTERS:
        text = text.replace(char, f"\\{char}")
    return text


def strip_markdown(text: str) -> str:
    """Remove emphasis markers so the message can be sent without a parse mode."""
    for marker in MARKDOWN_EMPHASIS_MARKERS:
        text = text.replace(marker, "")
    return text


def format_utc7(timestamp: str) -> str:
    """Format an ISO-8601 timestamp as ``DD/MM/YYYY HH:MM:SS UTC+7``.

    The offset is a flat +7 hour shift of the UTC instant, no timezone database is
    consulted. Timestamps without an offset are read as UTC. Unparsable input is
    returned unchanged.
    """
    try:
        instant = datetime.fromisoformat(timestamp)
    except ValueError:
        logger.debug(f"Could not parse timestamp {timestamp!r}, using it verbatim")
        return timestamp

    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=UTC)

    try:
        shifted = instant.astimezone(UTC) + UTC7_OFFSET
    except OverflowError:
        logger.debug(f"Timestamp {timestamp!r} is out of range, using it verbatim")
        return timestamp

    return shifted.strftime("%d/%m/%Y %H:%M:%S") + " UTC+7"


def compose_alert_message(ip: str, formatted_time: str, user_agent: str, geo: GeoInfo) -> str:
    """Build the alert text.

    The IP is wrapped in backticks and not escaped; every other interpolated value
    is escaped. Country and ISP lines are only present when enrichment found them.
    """
    lines = [
        "🔍 **IP Tracker Alert**",
        "",
        f"📍 **IP Address:** `{ip}`",
    ]
    if geo.country_text:
        lines.append(f"🌎 **Country:** {escape_markdown(geo.country_text)}")
    if geo.isp_text:
        lines.append(f"🏷 **ISP:** {escape_markdown(geo.isp_text)}")
    lines.append(f"🕐 **Time:** {escape_markdown(formatted_time)}")
    lines.append(f"📱 **User Agent:** {escape_markdown(user_agent)}")
    return "\n".join(lines)
