# src/interfaces/slack/events.py
"""Channel activity events for the Slack chat surface.

Besides messages, the bot listens for activity in the channel:

- member_joined_channel: greets the new member in the channel
- member_left_channel: logged
- reaction_added: logged

Like message events, these reach the handler through the bot's inbound
queue, so they are handled in arrival order with the messages.
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from src.interfaces.slack.slack_api import SlackSender
from src.utils.logging import bind_event

logger = logging.getLogger(__name__)

ActivityHandler = Callable[[dict[str, Any], Any], Awaitable[None]]

WELCOME_MESSAGE = (
    "👋 Bem-vindo(a) ao canal, {mention}! Digite !ping para testar o bot."
)

CHANNEL_EVENT_TYPES = (
    "member_joined_channel",
    "member_left_channel",
    "reaction_added",
)


class ChannelEventService:
    """Reacts to channel activity other than chat messages.

    Attributes:
        bot_user_id: The bot's own Slack user ID; its own joins are ignored.
        channel_id: When set, only activity in this channel is handled.
        welcome_message: Greeting template with a {mention} placeholder.
    """

    def __init__(
        self,
        bot_user_id: str | None = None,
        channel_id: str | None = None,
        welcome_message: str = WELCOME_MESSAGE,
    ) -> None:
        self.bot_user_id = bot_user_id or None
        self.channel_id = channel_id or None
        self.welcome_message = welcome_message
        self._handlers: dict[str, ActivityHandler] = {
            "member_joined_channel": self.on_member_joined,
            "member_left_channel": self.on_member_left,
            "reaction_added": self.on_reaction_added,
        }

    async def handle(self, event: dict[str, Any], client: Any) -> None:
        """Route one activity event by its type; unknown types are ignored."""
        handler = self._handlers.get(event.get("type", ""))
        if handler is None:
            return
        channel = self._channel_of(event)
        if self.channel_id and channel != self.channel_id:
            logger.debug("Ignoring %s in channel %s", event.get("type"), channel)
            return
        bind_event("slack", event.get("event_ts", ""), channel)
        await handler(event, client)

    async def on_member_joined(self, event: dict[str, Any], client: Any) -> None:
        user = event.get("user")
        channel = event.get("channel")
        if not user or not channel or user == self.bot_user_id:
            return

        logger.info("Member joined: %s (channel %s)", user, channel)
        sender = SlackSender(client)
        await sender.send(
            channel, self.welcome_message.format(mention=sender.mention(user))
        )

    async def on_member_left(self, event: dict[str, Any], client: Any) -> None:
        logger.info(
            "Member left: %s (channel %s)", event.get("user"), event.get("channel")
        )

    async def on_reaction_added(self, event: dict[str, Any], client: Any) -> None:
        logger.info(
            "Reaction :%s: by %s in %s",
            event.get("reaction"),
            event.get("user"),
            self._channel_of(event),
        )

    @staticmethod
    def _channel_of(event: dict[str, Any]) -> str | None:
        # reaction_added carries the channel on the reacted-to item
        if "channel" in event:
            return event["channel"]
        return (event.get("item") or {}).get("channel")
