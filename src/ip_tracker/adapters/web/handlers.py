"""HTTP endpoints for IP resolution and alert delivery.

Every endpoint converts failures into a JSON ``{"error": ...}`` body; stack traces
are logged and never returned to the caller.
"""

import logging
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from ip_tracker.application.services import parse_notification_request, resolve_client_identity
from ip_tracker.domain.exceptions import ConfigurationError, DeliveryError, InvalidFieldError

if TYPE_CHECKING:
    from starlette.requests import Request

    from ip_tracker.application.services import NotificationService

logger = logging.getLogger(__name__)

RESOLVE_FAILED_MESSAGE = "Failed to get IP address"
SEND_FAILED_MESSAGE = "Failed to send to Telegram"
INVALID_BODY_MESSAGE = "Invalid request body"


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


async def get_ip(request: "Request") -> JSONResponse:
    """Resolve the caller's IP address from proxy headers."""
    try:
        identity = resolve_client_identity(request.headers)
    except Exception:
        logger.exception("Error getting IP")
        return _error(RESOLVE_FAILED_MESSAGE, 500)
    return JSONResponse(identity.to_payload())


async def send_telegram(request: "Request") -> JSONResponse:
    """Validate the body and deliver one alert to the configured chat."""
    notification_service: NotificationService = request.app.state.notification_service

    try:
        payload = await request.json()
    except ValueError:
        return _error(INVALID_BODY_MESSAGE, 400)
    except Exception:
        logger.exception("Error reading request body")
        return _error(SEND_FAILED_MESSAGE, 500)

    try:
        notification_request = parse_notification_request(payload)
    except InvalidFieldError as e:
        return _error(e.message, 400)

    try:
        await notification_service.notify(notification_request)
    except ConfigurationError as e:
        logger.error(f"Cannot send alert: {e}")
        return _error(str(e), 500)
    except DeliveryError as e:
        logger.error(f"Telegram API error: {e}")
        return _error(SEND_FAILED_MESSAGE, 500)
    except Exception:
        logger.exception("Error sending to Telegram")
        return _error(SEND_FAILED_MESSAGE, 500)

    return JSONResponse({"success": True})
