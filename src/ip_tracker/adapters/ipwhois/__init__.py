"""ipwho.is geolocation adapter."""

from ip_tracker.adapters.ipwhois.ipwhois_geo_lookup import IpWhoisGeoLookup

__all__ = ["IpWhoisGeoLookup"]
