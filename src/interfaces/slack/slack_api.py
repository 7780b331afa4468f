# src/interfaces/slack/slack_api.py
"""Slack outbound messaging."""

from typing import Any

from src.core.commands.models import ChatId


class SlackSender:
    """ChatSender implementation for Slack channels.

    Wraps a Slack AsyncWebClient. API errors propagate to the caller so the
    dispatcher can report a failed command.
    """

    def __init__(self, client: Any) -> None:
        """Initialize with a Slack client.

        Args:
            client: Slack AsyncWebClient instance.
        """
        self._client = client

    async def send(self, channel: ChatId, text: str) -> None:
        """Post a message to a channel.

        Args:
            channel: Slack channel ID.
            text: Message text.
        """
        await self._client.chat_postMessage(channel=str(channel), text=text)

    def mention(self, user: ChatId) -> str:
        return f"<@{user}>"
