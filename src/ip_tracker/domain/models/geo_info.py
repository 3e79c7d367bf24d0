"""Geolocation enrichment domain model."""

from pydantic import BaseModel, ConfigDict


class GeoInfo(BaseModel):
    """Best-effort geolocation details for an IP address.

    Both fields are empty strings when the lookup failed or returned nothing usable.
    """

    model_config = ConfigDict(frozen=True)

    country_text: str = ""
    isp_text: str = ""

    @property
    def is_empty(self) -> bool:
        """Return True when no enrichment data is available."""
        return not self.country_text and not self.isp_text
