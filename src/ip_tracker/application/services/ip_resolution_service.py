"""Client IP resolution from proxy headers.

The precedence chain is the ordered ``IP_HEADER_RULES`` tuple. Rules are evaluated
in order and the first header carrying a value decides the result; values are
never merged across headers.
"""

import re
from collections.abc import Callable, Mapping
from datetime import UTC, datetime

from ip_tracker.domain.models import ForwardingHeaders, ResolvedIdentity

DEVELOPMENT_FALLBACK_IP = "127.0.0.1"
DEFAULT_USER_AGENT = "Unknown"
DEFAULT_REFERER = "Direct"

_FORWARDED_FOR_PATTERN = re.compile(r"for=([^;,]+)", re.IGNORECASE)


def _first_in_list(value: str) -> str | None:
    """Return the first entry of a comma-separated address list."""
    return value.split(",")[0].strip()


def _verbatim(value: str) -> str | None:
    return value


def _forwarded_for(value: str) -> str | None:
    """Extract the first ``for=`` node of an RFC 7239 Forwarded header.

    Handles ``for=1.2.3.4`` and quoted IPv6 literals like ``for="[2001:db8::1]"``.
    Returns None when no ``for=`` parameter can be found.
    """
    match = _FORWARDED_FOR_PATTERN.search(value)
    if not match:
        return None
    node = match.group(1)
    node = node.removeprefix('"').removesuffix('"')
    return node.removeprefix("[").removesuffix("]")


IP_HEADER_RULES: tuple[tuple[str, Callable[[str], str | None]], ...] = (
    ("x-forwarded-for", _first_in_list),
    ("x-real-ip", _verbatim),
    ("cf-connecting-ip", _verbatim),
    ("x-vercel-forwarded-for", _first_in_list),
    ("forwarded", _forwarded_for),
)


def _normalize_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Lower-case header names, keeping the first value of repeated headers."""
    normalized: dict[str, str] = {}
    for name, value in headers.items():
        normalized.setdefault(name.lower(), value)
    return normalized


def _resolve_ip(headers: Mapping[str, str]) -> str:
    """Apply the header rules in order; the first present header decides the IP."""
    for header_name, extract in IP_HEADER_RULES:
        value = headers.get(header_name)
        if not value:
            continue
        # A present but unparsable header ends the chain at the fallback.
        ip = extract(value)
        return DEVELOPMENT_FALLBACK_IP if ip is None else ip
    return DEVELOPMENT_FALLBACK_IP


def _iso_timestamp(now: datetime) -> str:
    """Format an instant as ``YYYY-MM-DDTHH:MM:SS.mmmZ`` in UTC."""
    return now.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def resolve_client_identity(
    headers: Mapping[str, str], now: datetime | None = None
) -> ResolvedIdentity:
    """Derive the client identity of a request from its headers.

    Args:
        headers: Request headers. Names are matched case-insensitively.
        now: Capture time, defaults to the current UTC time.

    Returns:
        The resolved identity, including the raw proxy header values consulted.
    """
    normalized = _normalize_headers(headers)
    captured_at = now or datetime.now(UTC)

    return ResolvedIdentity(
        ip=_resolve_ip(normalized),
        user_agent=normalized.get("user-agent") or DEFAULT_USER_AGENT,
        referer=normalized.get("referer") or DEFAULT_REFERER,
        timestamp=_iso_timestamp(captured_at),
        raw_headers=ForwardingHeaders(
            forwarded=normalized.get("x-forwarded-for"),
            real_ip=normalized.get("x-real-ip"),
            cf_connecting_ip=normalized.get("cf-connecting-ip"),
            vercel_forwarded_for=normalized.get("x-vercel-forwarded-for"),
            forwarded_standard=normalized.get("forwarded"),
        ),
    )
