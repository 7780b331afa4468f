"""Command module for chat command parsing, registration and dispatch.

This module provides:
- Command: Protocol implemented by chat commands
- CommandContext: Per-invocation context passed to commands
- ChatMessage / ChatSender: Inbound event and outbound capability
- ParsedCommand / parse_command: Prefix-based command parsing
- CommandRegistry / build_registry: Name and alias lookup
- CommandDispatcher: Parses, looks up and runs commands with error isolation
- Built-in commands: PingCommand, SystemPingCommand, AskCommand
"""

from src.core.commands.builtin import AskCommand, PingCommand, SystemPingCommand
from src.core.commands.dispatcher import FAILURE_NOTICE, CommandDispatcher
from src.core.commands.models import (
    ChatMessage,
    ChatSender,
    Command,
    CommandContext,
)
from src.core.commands.parser import ParsedCommand, parse_command
from src.core.commands.registry import CommandRegistry, build_registry

__all__ = [
    "Command",
    "CommandContext",
    "ChatMessage",
    "ChatSender",
    "ParsedCommand",
    "parse_command",
    "CommandRegistry",
    "build_registry",
    "CommandDispatcher",
    "FAILURE_NOTICE",
    "PingCommand",
    "SystemPingCommand",
    "AskCommand",
]
