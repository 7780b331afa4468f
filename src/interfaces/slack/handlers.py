# src/interfaces/slack/handlers.py
"""Event handlers for the Slack chat surface.

Channel messages are open to everyone in the channel, so there is no
allow-list here. The only filter is the bot's own user ID, which keeps the
bot from answering its own replies in a loop.
"""

import logging
from typing import Any

from src.core.commands.dispatcher import CommandDispatcher
from src.core.commands.models import ChatMessage
from src.interfaces.slack.slack_api import SlackSender
from src.utils.logging import bind_event

logger = logging.getLogger(__name__)


class ChatEventHandler:
    """Turns Slack message events into dispatcher calls.

    Attributes:
        dispatcher: Command dispatcher for this surface.
        bot_user_id: The bot's own Slack user ID.
        channel_id: When set, only messages from this channel are handled.
    """

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        bot_user_id: str | None = None,
        channel_id: str | None = None,
    ) -> None:
        self.dispatcher = dispatcher
        self.bot_user_id = bot_user_id or None
        self.channel_id = channel_id or None

    def is_self(self, user: str) -> bool:
        return self.bot_user_id is not None and user == self.bot_user_id

    async def handle(self, event: dict[str, Any], client: Any) -> None:
        """Handle one Slack message event.

        Args:
            event: Slack event payload.
            client: Slack AsyncWebClient used for replies.
        """
        # Edits, deletions, joins and other subtypes are not chat messages
        if event.get("subtype"):
            return

        user = event.get("user")
        channel = event.get("channel")
        text = event.get("text") or ""
        if not user or not channel:
            return

        if self.is_self(user):
            return

        if self.channel_id and channel != self.channel_id:
            logger.debug("Ignoring message from channel %s", channel)
            return

        bind_event("slack", event.get("ts", ""), channel)
        logger.debug("[%s] %s: %s", channel, user, text)

        await self.dispatcher.dispatch(
            ChatMessage(channel=channel, user=user, text=text),
            SlackSender(client),
        )
