# src/core/commands/dispatcher.py
"""Command dispatcher tying the parser and the registry together.

The dispatcher decides whether an inbound message is a command, looks the
command up and runs it. Command failures never escape dispatch(): they are
logged and answered with one generic notice so a broken command cannot take
down the event loop that feeds it.
"""

import logging

from src.core.commands.models import ChatMessage, ChatSender, CommandContext
from src.core.commands.parser import parse_command
from src.core.commands.registry import CommandRegistry

logger = logging.getLogger(__name__)

FAILURE_NOTICE = "Ops, tive um erro interno."


class CommandDispatcher:
    """Routes prefixed messages to registered commands.

    Attributes:
        registry: Registry used for lookups.
        prefix: Non-empty prefix marking a message as a command.
    """

    def __init__(self, registry: CommandRegistry, prefix: str = "!") -> None:
        if not prefix:
            raise ValueError("Command prefix must be a non-empty string")
        self.registry = registry
        self.prefix = prefix

    async def dispatch(self, event: ChatMessage, sender: ChatSender) -> bool:
        """Dispatch one inbound message.

        Messages without the prefix, empty command names and unknown
        commands are ignored without any reply.

        Args:
            event: The inbound message.
            sender: Outbound capability of the surface the message came from.

        Returns:
            True if a command handler was invoked, False otherwise.
        """
        parsed = parse_command(event.text, self.prefix)
        if parsed is None:
            return False

        command = self.registry.get(parsed.name)
        if command is None:
            logger.debug("Ignoring unknown command %s%s", self.prefix, parsed.name)
            return False

        ctx = CommandContext(
            channel=event.channel,
            user=event.user,
            message=event.text,
            args=parsed.args,
            sender=sender,
            prefix=self.prefix,
        )

        try:
            logger.info(
                "Executing command %s%s for user %s in %s",
                self.prefix,
                parsed.name,
                event.user,
                event.channel,
            )
            await command.execute(ctx)
        except Exception as e:
            logger.exception(
                "Error executing command %s%s (channel=%s, user=%s): %s",
                self.prefix,
                parsed.name,
                event.channel,
                event.user,
                e,
            )
            await self._send_failure_notice(ctx)

        return True

    async def _send_failure_notice(self, ctx: CommandContext) -> None:
        text = f"{ctx.mention} {FAILURE_NOTICE}".strip()
        try:
            await ctx.reply(text)
        except Exception as e:
            logger.error(
                "Failed to send failure notice to %s: %s", ctx.channel, e
            )
