"""Notification request domain model."""

from pydantic import BaseModel, ConfigDict


class NotificationRequest(BaseModel):
    """A validated request to send one alert message."""

    model_config = ConfigDict(frozen=True)

    ip: str
    user_agent: str
    timestamp: str
