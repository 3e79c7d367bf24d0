"""Main entry point for the IP tracker service."""

import asyncio
import logging
import sys

import aiohttp

from ip_tracker.adapters.config import AppConfig
from ip_tracker.adapters.web import WebServer

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the process."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


async def main() -> None:
    """Main application entry point."""
    config = AppConfig()
    configure_logging(config.log_level)

    if not config.telegram_configured:
        logger.warning("Telegram is not configured.")
        logger.warning("Set TELEGRAM_BOT_TOKEN and TELEGRAM_CHAT_ID in the environment or .env.")

    # Create aiohttp session for efficient HTTP connections
    async with aiohttp.ClientSession() as session:
        server = WebServer(config, session)
        try:
            await server.start()
        except KeyboardInterrupt:
            logger.info("Shutting down...")
            await server.stop()


if __name__ == "__main__":
    asyncio.run(main())
