# src/interfaces/slack/bot.py
"""Slack bot implementation with AsyncApp and AsyncSocketModeHandler.

Slack message and channel activity events are queued and handled one at a
time by a single consumer task, which keeps them in arrival order. The Bolt
listener itself only enqueues, so Slack gets its ack right away.
"""

import logging
from typing import Any

from slack_bolt.adapter.socket_mode.async_handler import AsyncSocketModeHandler
from slack_bolt.async_app import AsyncApp

from src.config import Settings
from src.core.commands.dispatcher import CommandDispatcher
from src.core.inbound import InboundQueue
from src.interfaces.slack.events import CHANNEL_EVENT_TYPES, ChannelEventService
from src.interfaces.slack.handlers import ChatEventHandler

logger = logging.getLogger(__name__)

SlackEvent = tuple[str, dict[str, Any], Any]


class SlackBot:
    """Lifecycle component connecting the dispatcher to Slack.

    The bot stays disabled when SLACK_BOT_TOKEN or SLACK_APP_TOKEN is missing.
    """

    def __init__(self, settings: Settings, dispatcher: CommandDispatcher) -> None:
        self._settings = settings
        self._dispatcher = dispatcher
        self._app: AsyncApp | None = None
        self._socket_handler: AsyncSocketModeHandler | None = None
        self._event_handler: ChatEventHandler | None = None
        self._channel_events: ChannelEventService | None = None
        self._queue: InboundQueue[SlackEvent] = InboundQueue("slack", self._consume)

    @property
    def is_running(self) -> bool:
        return self._socket_handler is not None

    def create_app(self) -> AsyncApp:
        """Create the Bolt app and register the message and activity listeners."""
        app = AsyncApp(token=self._settings.slack_bot_token)
        app.event("message")(self.on_message)
        for event_type in CHANNEL_EVENT_TYPES:
            app.event(event_type)(self.on_channel_event)
        return app

    async def start(self) -> None:
        """Connect to Slack over Socket Mode."""
        if not self._settings.slack_enabled:
            logger.warning(
                "SLACK_BOT_TOKEN or SLACK_APP_TOKEN not set - Slack bot disabled"
            )
            return

        self._app = self.create_app()
        bot_user_id = self._settings.slack_bot_user_id
        if not bot_user_id:
            bot_user_id = await self._resolve_bot_user_id(self._app.client)
        self._event_handler = ChatEventHandler(
            self._dispatcher,
            bot_user_id=bot_user_id,
            channel_id=self._settings.slack_channel,
        )
        self._channel_events = ChannelEventService(
            bot_user_id=bot_user_id,
            channel_id=self._settings.slack_channel,
        )

        await self._queue.start()
        self._socket_handler = AsyncSocketModeHandler(
            self._app, self._settings.slack_app_token
        )
        await self._socket_handler.connect_async()
        logger.info("Slack bot connected with Socket Mode (bot user %s)", bot_user_id)

    async def shutdown(self) -> None:
        if self._socket_handler is not None:
            logger.info("Disconnecting from Slack...")
            await self._socket_handler.close_async()
            self._socket_handler = None
        await self._queue.shutdown()

    async def on_message(self, event: dict[str, Any], client: Any) -> None:
        """Bolt listener for message events."""
        await self._queue.submit(("message", event, client))

    async def on_channel_event(self, event: dict[str, Any], client: Any) -> None:
        """Bolt listener for member and reaction events."""
        await self._queue.submit(("activity", event, client))

    async def _consume(self, item: SlackEvent) -> None:
        kind, event, client = item
        if kind == "message":
            if self._event_handler is not None:
                await self._event_handler.handle(event, client)
        elif self._channel_events is not None:
            await self._channel_events.handle(event, client)

    @staticmethod
    async def _resolve_bot_user_id(client: Any) -> str | None:
        try:
            result = await client.auth_test()
            return result.get("user_id")
        except Exception as e:
            logger.error("Failed to resolve Slack bot user ID: %s", e)
            return None
