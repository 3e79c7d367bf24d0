"""Message delivery through the Telegram Bot API ``sendMessage`` method.

API Documentation: https://core.telegram.org/bots/api#sendmessage
"""

import asyncio
import logging
from typing import TYPE_CHECKING, Any

import aiohttp

from ip_tracker.adapters.api_request_logger import log_api_request, redact_url
from ip_tracker.domain.exceptions import ConfigurationError, DeliveryError, EntityParseError
from ip_tracker.domain.ports import MessageSender

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from aiohttp import ClientResponse, ClientSession

DEFAULT_API_BASE_URL = "https://api.telegram.org"
ENTITY_PARSE_ERROR_MARKER = "parse entities"


def is_entity_parse_error(error_data: Any) -> bool:
    """Check whether an error body reports that message entities could not be parsed."""
    if not isinstance(error_data, dict):
        return False
    description = error_data.get("description")
    return (
        error_data.get("error_code") == 400
        and isinstance(description, str)
        and ENTITY_PARSE_ERROR_MARKER in description
    )


class TelegramMessageSender(MessageSender):
    """Adapter sending text messages to one Telegram chat."""

    def __init__(
        self,
        session: "ClientSession",
        bot_token: str | None,
        chat_id: str | None,
        api_base_url: str = DEFAULT_API_BASE_URL,
    ) -> None:
        """Initialize with an aiohttp session and the chat credentials.

        Delivery calls carry no explicit timeout and rely on the session defaults.
        """
        self._session = session
        self._bot_token = bot_token
        self._chat_id = chat_id
        self._api_base_url = api_base_url.rstrip("/")

    @property
    def is_configured(self) -> bool:
        return bool(self._bot_token) and bool(self._chat_id)

    def _send_message_url(self) -> str:
        return f"{self._api_base_url}/bot{self._bot_token}/sendMessage"

    def build_payload(self, text: str, parse_mode: str | None) -> dict[str, Any]:
        """Build the sendMessage body, omitting parse_mode for plain text."""
        payload: dict[str, Any] = {"chat_id": self._chat_id, "text": text}
        if parse_mode is not None:
            payload["parse_mode"] = parse_mode
        return payload

    async def _read_error(self, response: "ClientResponse") -> Any:
        try:
            return await response.json(content_type=None)
        except ValueError:
            return {"description": (await response.text())[:500]}

    async def _handle_response(self, response: "ClientResponse", url: str) -> None:
        if 200 <= response.status < 300:
            return

        error_data = await self._read_error(response)
        if is_entity_parse_error(error_data):
            raise EntityParseError(error_data["description"], status_code=response.status)

        description = ""
        if isinstance(error_data, dict):
            description = str(error_data.get("description") or "")
        logger.error(
            f"Telegram API returned status {response.status} for {redact_url(url)}: "
            f"{description or '(no description)'}"
        )
        raise DeliveryError(description or "Telegram API error", status_code=response.status)

    async def send(self, text: str, parse_mode: str | None = None) -> None:
        """Send a message to the configured chat.

        Raises:
            ConfigurationError: Bot token or chat id is missing.
            EntityParseError: Telegram could not parse the message markup.
            DeliveryError: Any other failure, including network errors.
        """
        if not self.is_configured:
            raise ConfigurationError("Telegram configuration missing")

        url = self._send_message_url()
        payload = self.build_payload(text, parse_mode)
        log_api_request("POST", url, payload)

        try:
            async with self._session.post(url, json=payload) as response:
                await self._handle_response(response, url)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Error in Telegram request: {e}")
            raise DeliveryError(f"Telegram request failed: {e}") from e
