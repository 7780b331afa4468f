# src/core/commands/builtin.py
"""Built-in commands available on the chat surfaces."""

import logging

from src.core.ai import AiProvider, AiService
from src.core.commands.models import CommandContext

logger = logging.getLogger(__name__)

ASK_SYSTEM_PROMPT = (
    "Você é um assistente simpático em um chat ao vivo. "
    "Responda em português, de forma curta e direta, em no máximo três frases."
)
NO_ANSWER_MESSAGE = "não consegui gerar uma resposta agora."


class PingCommand:
    """Liveness check for the public chat: !ping, !teste, !latency."""

    name = "ping"
    aliases = ("teste", "latency")

    async def execute(self, ctx: CommandContext) -> None:
        await ctx.reply(f"Pong! 🏓 Olá {ctx.mention}")


class SystemPingCommand:
    """Liveness check for the operator surface."""

    name = "ping"
    aliases: tuple[str, ...] = ()

    async def execute(self, ctx: CommandContext) -> None:
        await ctx.reply("Pong! 🏓 (System Operational)")


class AskCommand:
    """Answer a question with the configured AI provider.

    Usage: !ask <question> (aliases: !ia, !pergunta)
    """

    name = "ask"
    aliases = ("ia", "pergunta")

    def __init__(
        self,
        ai: AiService,
        provider: AiProvider | str = AiProvider.OLLAMA,
        system_prompt: str = ASK_SYSTEM_PROMPT,
    ) -> None:
        self.ai = ai
        self.provider = provider
        self.system_prompt = system_prompt

    async def execute(self, ctx: CommandContext) -> None:
        if not ctx.args:
            await ctx.reply(
                f"{ctx.mention} Uso: {ctx.prefix}{self.name} <pergunta>".strip()
            )
            return

        question = " ".join(ctx.args)
        answer = await self.ai.complete(
            self.system_prompt, question, provider=self.provider
        )
        if answer is None:
            await ctx.reply(f"{ctx.mention} {NO_ANSWER_MESSAGE}".strip())
            return

        await ctx.reply(f"{ctx.mention} {answer}".strip())
