"""Geolocation lookup port."""

from typing import Protocol

from ip_tracker.domain.models.geo_info import GeoInfo


class GeoLookup(Protocol):
    """Port for enriching an IP address with location and network details."""

    async def lookup(self, ip: str) -> GeoInfo:
        """Look up an IP address.

        Implementations must not raise; failures are reported as an empty GeoInfo.
        """
        ...
