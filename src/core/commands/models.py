# src/core/commands/models.py
"""Command data models shared by every chat surface.

This module defines the Command protocol that built-in commands implement,
the inbound ChatMessage event, the ChatSender outbound capability and the
per-invocation CommandContext passed to command handlers.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

ChatId = str | int


@dataclass(frozen=True)
class ChatMessage:
    """An inbound chat event.

    Attributes:
        channel: Channel or chat identifier the message arrived on.
        user: Identifier of the user who sent it.
        text: Raw message text, untouched.
    """

    channel: ChatId
    user: ChatId
    text: str


class ChatSender(Protocol):
    """Outbound capability of a chat surface."""

    async def send(self, channel: ChatId, text: str) -> None:
        """Send text to a channel or chat."""
        ...

    def mention(self, user: ChatId) -> str:
        """Render a user reference for this surface (may be empty)."""
        ...


@dataclass
class CommandContext:
    """Everything a command needs for one invocation.

    Built by the dispatcher for a single call and discarded afterwards.

    Attributes:
        channel: Channel or chat the command was invoked in.
        user: Invoking user identifier.
        message: The full original message text (prefix included).
        args: Arguments split on whitespace, command token removed.
        sender: Outbound capability of the originating surface.
        prefix: Command prefix in use on this surface.
    """

    channel: ChatId
    user: ChatId
    message: str
    args: list[str]
    sender: ChatSender
    prefix: str = "!"

    @property
    def mention(self) -> str:
        return self.sender.mention(self.user)

    async def reply(self, text: str) -> None:
        """Send text back to the channel the command came from."""
        await self.sender.send(self.channel, text)


@runtime_checkable
class Command(Protocol):
    """A chat command.

    Example:
        >>> class HelloCommand:
        ...     name = "hello"
        ...     aliases = ("hi",)
        ...
        ...     async def execute(self, ctx: CommandContext) -> None:
        ...         await ctx.reply(f"Hello {ctx.mention}!")
    """

    name: str
    aliases: Sequence[str]

    async def execute(self, ctx: CommandContext) -> None:
        """Run the command."""
        ...

