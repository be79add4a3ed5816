"""
The command registry used by the gateway.

Commands register themselves in the module-level ``command_registry`` with
the ``@register_command`` decorator. A ``CommandRegistry`` takes a snapshot of
those classes and produces a fresh instance for every lookup.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from cli_commander.core.commands.base import BaseCommand, CommandContext, command_registry
from cli_commander.core.interfaces.command_registry_interface import ICommandRegistry

logger = logging.getLogger(__name__)


class CommandRegistry(ICommandRegistry):
    """Map command names to command classes.

    Args:
        commands: Command classes keyed by name. Defaults to every command
            registered with ``@register_command``.
        context: Context handed to each created command instance.
    """

    def __init__(
        self,
        commands: Mapping[str, type[BaseCommand]] | None = None,
        context: CommandContext | None = None,
    ) -> None:
        source = command_registry if commands is None else commands
        self._commands: dict[str, type[BaseCommand]] = dict(source)
        self._context = context
        logger.debug("Loaded %d commands: %s", len(self._commands), self.list_names())

    def register(self, cls: type[BaseCommand]) -> type[BaseCommand]:
        """Add a command class to this registry only."""
        if cls.name in self._commands:
            raise ValueError(f"Command '{cls.name}' is already registered.")
        self._commands[cls.name] = cls
        return cls

    def resolve(self, name: str) -> BaseCommand | None:
        cls = self._commands.get(name)
        if cls is None:
            return None
        return cls(context=self._context)

    def list_names(self) -> list[str]:
        return sorted(self._commands)
