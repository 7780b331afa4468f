"""Observability configuration with Pydantic Logfire."""

import logging

logger = logging.getLogger(__name__)


def setup_logfire(token: str) -> bool:
    """Configure Logfire for observability.

    Only activates if a LOGFIRE_TOKEN is configured.
    Call this at application startup before the bots connect.

    Returns:
        True if Logfire was configured.
    """
    if not token:
        return False

    try:
        import logfire

        logfire.configure(token=token, send_to_logfire="if-token-present")
        logfire.instrument_httpx(capture_all=True)
    except Exception as e:
        # Log but don't fail - observability is optional
        logger.warning("Failed to configure Logfire: %s", str(e))
        return False

    return True
