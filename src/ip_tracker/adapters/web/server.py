"""uvicorn server wrapper for the HTTP application."""

import logging
from typing import TYPE_CHECKING

import uvicorn

from ip_tracker.adapters.config import AppConfig

from .app import create_app

if TYPE_CHECKING:
    from aiohttp import ClientSession

logger = logging.getLogger(__name__)


class WebServer:
    """Runs the Starlette application with uvicorn inside the current event loop."""

    def __init__(self, config: AppConfig, session: "ClientSession") -> None:
        """Initialize the server.

        Args:
            config: Application configuration.
            session: Shared aiohttp session used by the outbound adapters.
        """
        self.config = config
        self.session = session
        self._server: uvicorn.Server | None = None

    async def start(self) -> None:
        """Start serving until the server is asked to exit."""
        app = create_app(self.config, self.session)
        server_config = uvicorn.Config(
            app,
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
        )
        self._server = uvicorn.Server(server_config)
        logger.info(f"Listening on http://{self.config.host}:{self.config.port}")
        await self._server.serve()

    async def stop(self) -> None:
        """Ask the running server to exit."""
        if self._server:
            self._server.should_exit = True
