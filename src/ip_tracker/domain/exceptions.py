"""Errors raised by the resolver and notifier."""


class IpTrackerError(Exception):
    """Base class for all errors raised by this package."""


class InvalidFieldError(IpTrackerError):
    """A required request field is missing or has the wrong type."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class ConfigurationError(IpTrackerError):
    """Required messaging credentials are not configured."""


class DeliveryError(IpTrackerError):
    """The messaging endpoint did not accept the notification."""

    def __init__(self, description: str, status_code: int | None = None) -> None:
        super().__init__(description)
        self.description = description
        self.status_code = status_code

    def __str__(self) -> str:
        if self.status_code is None:
            return self.description
        return f"{self.status_code}: {self.description}"


class EntityParseError(DeliveryError):
    """The messaging endpoint could not parse the markup entities of the message."""
