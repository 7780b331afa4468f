# src/core/commands/registry.py
"""Registry mapping command names and aliases to Command instances."""

import logging
from collections.abc import Iterable

from src.core.commands.models import Command

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Name to Command lookup with O(1) access.

    A command is stored under its primary name and under every alias.
    Registering a key that already exists overwrites the previous entry,
    so the last registration wins. Once frozen the registry is read-only
    and can be shared between event sources without locking.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}
        self._frozen = False

    def register(self, command: Command) -> None:
        """Register a command under its name and aliases.

        Raises:
            RuntimeError: If the registry has been frozen.
        """
        if self._frozen:
            raise RuntimeError(
                f"Cannot register '{command.name}': command registry is frozen"
            )

        for key in (command.name, *command.aliases):
            key = key.lower()
            if key in self._commands:
                logger.debug("Command key '%s' overwritten", key)
            self._commands[key] = command

        logger.info("Command registered: %s", command.name)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, name: str) -> Command | None:
        """Look up a command by name or alias."""
        return self._commands.get(name)

    def names(self) -> list[str]:
        """Sorted list of every registered key (names and aliases)."""
        return sorted(self._commands)

    def __contains__(self, name: object) -> bool:
        return name in self._commands

    def __len__(self) -> int:
        return len(self._commands)


def build_registry(commands: Iterable[Command]) -> CommandRegistry:
    """Build a frozen registry from a fixed list of commands.

    Args:
        commands: Commands in registration order.

    Returns:
        A frozen CommandRegistry.
    """
    registry = CommandRegistry()
    for command in commands:
        registry.register(command)
    registry.freeze()
    return registry
