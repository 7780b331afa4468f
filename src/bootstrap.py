# src/bootstrap.py
"""Explicit construction of every runtime component.

build_services() wires the application in dependency order:
Settings -> AccessGate -> AiService -> registries -> dispatchers -> bots.
Nothing is a global singleton; tests build their own Services with fakes.
"""

import logging
from dataclasses import dataclass

from src.config import Settings
from src.core.access import AccessGate
from src.core.ai import AiService, build_provider_entries
from src.core.commands import (
    AskCommand,
    CommandDispatcher,
    PingCommand,
    SystemPingCommand,
    build_registry,
)
from src.core.lifecycle import LifecycleManager
from src.interfaces.slack.bot import SlackBot
from src.interfaces.telegram.bot import TelegramBot

logger = logging.getLogger(__name__)


@dataclass
class Services:
    """Every long-lived component of the running application."""

    settings: Settings
    access_gate: AccessGate
    ai: AiService
    chat_dispatcher: CommandDispatcher
    telegram_dispatcher: CommandDispatcher
    slack: SlackBot
    telegram: TelegramBot
    lifecycle: LifecycleManager


def build_services(settings: Settings) -> Services:
    """Construct and wire all components from settings.

    Args:
        settings: Application settings.

    Returns:
        Services with a lifecycle manager that is registered but not started.
    """
    access_gate = AccessGate.from_config(settings.authorized_user_ids)
    ai = AiService(build_provider_entries(settings))

    chat_registry = build_registry(
        [
            PingCommand(),
            AskCommand(ai, provider=settings.ai_default_provider),
        ]
    )
    telegram_registry = build_registry(
        [
            SystemPingCommand(),
            AskCommand(ai, provider=settings.ai_default_provider),
        ]
    )
    chat_dispatcher = CommandDispatcher(
        chat_registry, prefix=settings.command_prefix
    )
    telegram_dispatcher = CommandDispatcher(
        telegram_registry, prefix=settings.telegram_command_prefix
    )

    slack = SlackBot(settings, chat_dispatcher)
    telegram = TelegramBot(
        settings.telegram_bot_token, access_gate, telegram_dispatcher
    )

    lifecycle = LifecycleManager()
    lifecycle.register("telegram", telegram)
    lifecycle.register("slack", slack)

    logger.info(
        "Services built: %d chat commands, %d telegram commands, %d authorized users",
        len(chat_registry),
        len(telegram_registry),
        len(access_gate.authorized_ids),
    )

    return Services(
        settings=settings,
        access_gate=access_gate,
        ai=ai,
        chat_dispatcher=chat_dispatcher,
        telegram_dispatcher=telegram_dispatcher,
        slack=slack,
        telegram=telegram,
        lifecycle=lifecycle,
    )
