"""Resolved client identity domain model."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ForwardingHeaders(BaseModel):
    """Raw values of the proxy headers consulted while resolving the client IP."""

    model_config = ConfigDict(frozen=True)

    # "forwarded" carries X-Forwarded-For, "forwardedStandard" the RFC 7239 header
    forwarded: str | None = Field(default=None, serialization_alias="forwarded")
    real_ip: str | None = Field(default=None, serialization_alias="realIp")
    cf_connecting_ip: str | None = Field(default=None, serialization_alias="cfConnectingIp")
    vercel_forwarded_for: str | None = Field(
        default=None, serialization_alias="vercelForwardedFor"
    )
    forwarded_standard: str | None = Field(
        default=None, serialization_alias="forwardedStandard"
    )


class ResolvedIdentity(BaseModel):
    """Best-guess identity of the client behind an inbound request."""

    model_config = ConfigDict(frozen=True)

    ip: str
    user_agent: str = Field(serialization_alias="userAgent")
    referer: str
    timestamp: str
    raw_headers: ForwardingHeaders = Field(serialization_alias="headers")

    def to_payload(self) -> dict[str, Any]:
        """Render the identity as the JSON object returned to HTTP callers."""
        return self.model_dump(by_alias=True)
