"""Geolocation lookup against the ipwho.is public API.

API Documentation: https://ipwhois.io/documentation
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import aiohttp

from ip_tracker.adapters.api_request_logger import log_api_request
from ip_tracker.domain.models import GeoInfo
from ip_tracker.domain.ports import GeoLookup

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

DEFAULT_BASE_URL = "https://ipwho.is"
DEFAULT_TIMEOUT_SECONDS = 2.5


def _country_text(data: dict[str, Any]) -> str:
    country = data.get("country") or ""
    code = data.get("country_code") or ""
    if not country:
        return ""
    return f"{country} ({code})" if code else country


def _isp_text(data: dict[str, Any]) -> str:
    """Join ISP, organisation (when distinct) and ASN with ' / '."""
    connection = data.get("connection")
    if not isinstance(connection, dict):
        connection = {}
    isp = connection.get("isp") or ""
    org = connection.get("org") or data.get("org") or ""
    asn = connection.get("asn") or ""

    parts: list[str] = []
    if isp:
        parts.append(str(isp))
    if org and org != isp:
        parts.append(str(org))
    if asn:
        parts.append(f"AS{asn}")
    return " / ".join(parts)


def parse_geo_response(data: Any) -> GeoInfo:
    """Convert an ipwho.is response body to GeoInfo.

    Bodies that are not objects or do not report ``success`` give an empty GeoInfo.
    """
    if not isinstance(data, dict) or not data.get("success"):
        return GeoInfo()
    return GeoInfo(country_text=_country_text(data), isp_text=_isp_text(data))


class IpWhoisGeoLookup(GeoLookup):
    """Adapter for ipwho.is lookups with a hard deadline."""

    def __init__(
        self,
        session: "ClientSession | None" = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize with optional aiohttp session.

        Args:
            session: Shared aiohttp session. Without one, lookups return empty results.
            base_url: Base URL of the lookup service.
            timeout_seconds: Total deadline for one lookup.
        """
        self._session = session
        self._base_url = base_url.rstrip("/")
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)

    def build_url(self, ip: str) -> str:
        """Build the lookup URL for an IP address."""
        return f"{self._base_url}/{quote(ip, safe='')}"

    async def _handle_response(self, response: "ClientResponse", ip: str) -> GeoInfo:
        if response.status != 200:
            logger.warning(f"Geolocation lookup for {ip} returned status {response.status}")
            return GeoInfo()
        data = await response.json(content_type=None)
        return parse_geo_response(data)

    async def lookup(self, ip: str) -> GeoInfo:
        """Look up an IP address, returning an empty GeoInfo on any failure."""
        if not self._session:
            return GeoInfo()

        url = self.build_url(ip)
        log_api_request("GET", url)

        try:
            async with self._session.get(url, timeout=self._timeout) as response:
                return await self._handle_response(response, ip)
        except asyncio.TimeoutError:
            logger.warning(f"Geolocation lookup for {ip} timed out")
        except Exception as e:
            logger.warning(f"Geolocation lookup for {ip} failed: {e}")
        return GeoInfo()
