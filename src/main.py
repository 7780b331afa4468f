# src/main.py
"""Bot entry point: runs the Slack and Telegram bots until interrupted.

Entry point: python -m src.main
"""

import asyncio
import logging

from dotenv import load_dotenv

from src.bootstrap import build_services
from src.config import Settings, get_settings
from src.utils.logging import configure_logging
from src.utils.observability import setup_logfire

logger = logging.getLogger(__name__)


async def run(settings: Settings) -> None:
    """Start every component and wait until cancelled."""
    services = build_services(settings)
    await services.lifecycle.startup()

    logger.info("%s running (env=%s)", settings.app_name, settings.app_env)
    try:
        await asyncio.Event().wait()
    except asyncio.CancelledError:
        logger.info("Received shutdown signal")
    finally:
        await services.lifecycle.shutdown()
        logger.info("Bots stopped")


def main() -> None:
    """Entry point with graceful shutdown handling."""
    load_dotenv()
    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)
    setup_logfire(settings.logfire_token)

    try:
        asyncio.run(run(settings))
    except KeyboardInterrupt:
        logger.info("Shutdown complete")


if __name__ == "__main__":
    main()
