"""Message sender port."""

from typing import Protocol


class MessageSender(Protocol):
    """Port for delivering a text message to the configured chat."""

    @property
    def is_configured(self) -> bool:
        """Whether the credentials needed for delivery are present."""
        ...

    async def send(self, text: str, parse_mode: str | None = None) -> None:
        """Send a message, optionally with a markup parse mode.

        Raises:
            EntityParseError: The endpoint could not parse the message markup.
            DeliveryError: Any other delivery failure.
        """
        ...
