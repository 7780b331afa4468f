# src/utils/logging.py
"""Logging setup with per-event context for both bots.

Each inbound Slack event or Telegram update binds an EventContext
(platform, event ID, channel) for the task handling it. Log records then
carry those fields:

- JSON output adds "platform", "event_id" and "channel" keys
- plain output prefixes the message with "[slack:1712.44 C123]"
"""

import json
import logging
from contextvars import ContextVar
from dataclasses import dataclass
from typing import Any

PLAIN_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(event_tag)s%(message)s"


@dataclass(frozen=True)
class EventContext:
    """Identifies the inbound event a log line belongs to."""

    platform: str
    event_id: str
    channel: str | None = None

    @property
    def tag(self) -> str:
        tag = f"{self.platform}:{self.event_id}"
        if self.channel:
            tag = f"{tag} {self.channel}"
        return f"[{tag}] "


_current_event: ContextVar[EventContext | None] = ContextVar(
    "current_event", default=None
)


def bind_event(
    platform: str, event_id: object, channel: object | None = None
) -> EventContext:
    """Bind the inbound event being handled to the current task.

    Args:
        platform: "slack" or "telegram".
        event_id: Slack event ts or Telegram update_id.
        channel: Slack channel or Telegram chat the event came from.
    """
    context = EventContext(
        platform=platform,
        event_id=str(event_id),
        channel=None if channel is None else str(channel),
    )
    _current_event.set(context)
    return context


def clear_event() -> None:
    _current_event.set(None)


def current_event() -> EventContext | None:
    return _current_event.get()


class EventContextFilter(logging.Filter):
    """Copies the bound EventContext onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = current_event()
        record.event = context
        record.event_tag = context.tag if context else ""
        return True


class StructuredFormatter(logging.Formatter):
    """One JSON object per record, with the event fields when bound."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "event", None) or current_event()
        if context is not None:
            payload["platform"] = context.platform
            payload["event_id"] = context.event_id
            if context.channel:
                payload["channel"] = context.channel

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False)


def configure_logging(
    level: int | str = logging.INFO, json_format: bool = False
) -> None:
    """Install one root handler, JSON or plain, with the event filter.

    Args:
        level: Logging level name or number.
        json_format: Emit JSON lines instead of plain text.
    """
    handler = logging.StreamHandler()
    handler.addFilter(EventContextFilter())
    if json_format:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logging.basicConfig(level=level, handlers=[handler], force=True)
