"""Utility functions for the bots."""

from src.utils.logging import (
    EventContext,
    bind_event,
    clear_event,
    configure_logging,
    current_event,
)
from src.utils.observability import setup_logfire

__all__ = [
    "setup_logfire",
    "EventContext",
    "bind_event",
    "clear_event",
    "current_event",
    "configure_logging",
]
