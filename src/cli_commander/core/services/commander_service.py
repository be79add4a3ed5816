"""
Command gateway service.

Handles one submitted command line at a time:
tokenize, validate, resolve, bind to the caller, execute, report. Every step
finishes before the next one starts and nothing is retried.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from cli_commander.core.commands.base import BaseCommand
from cli_commander.core.common.exceptions import UnknownCommandError
from cli_commander.core.domain.execution_result import ExecutionResult
from cli_commander.core.domain.identity import CallerIdentity
from cli_commander.core.interfaces.command_registry_interface import ICommandRegistry
from cli_commander.core.interfaces.model_bases import InternalDTO
from cli_commander.core.services.command_executor import CommandExecutor
from cli_commander.core.services.command_line import tokenize
from cli_commander.core.services.command_policy import CommandPolicy, ValidatedCommand
from cli_commander.core.services.execution_context import bind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandDescription(InternalDTO):
    name: str
    description: str
    usage: str


class CommanderService:
    """Run command lines against a command registry on behalf of a caller."""

    def __init__(
        self,
        registry: ICommandRegistry,
        policy: CommandPolicy,
        executor: CommandExecutor | None = None,
    ) -> None:
        self.registry = registry
        self.policy = policy
        self.executor = executor or CommandExecutor()

    def resolve(self, command_line: str | None) -> tuple[BaseCommand, ValidatedCommand]:
        """Turn a raw command line into a fresh command instance.

        Raises:
            EmptyInputError: If the line holds no command name.
            ForbiddenCommandError: If the command name is denylisted.
            UnknownCommandError: If the registry does not know the command.
        """
        validated = self.policy.validate(tokenize(command_line))
        command = self.registry.resolve(validated.name)
        if command is None:
            logger.warning("Unknown command %s", validated.name)
            raise UnknownCommandError(validated.name)
        return command, validated

    def run(self, command_line: str | None, caller: CallerIdentity) -> ExecutionResult:
        """Run ``command_line`` as ``caller`` and return the captured output.

        Raises:
            CommanderError: One of the rejection errors from ``resolve``, or
                ``CommandExecutionError`` if the command itself raised.
        """
        command, validated = self.resolve(command_line)
        logger.info(
            "Running %s with %d argument(s) as %s",
            validated.name,
            len(validated.args),
            caller.name,
        )
        bound = bind(command, caller)
        return self.executor.execute(bound, validated.args)

    def suggest(self, value: str | None) -> list[str]:
        """Return the command names starting with ``value``.

        Only the command name is completable, so nothing is suggested once the
        value contains whitespace.
        """
        value = value or ""
        if any(ch.isspace() for ch in value):
            return []
        return [name for name in self.registry.list_names() if name.startswith(value)]

    def describe_commands(self) -> list[CommandDescription]:
        descriptions: list[CommandDescription] = []
        for name in self.registry.list_names():
            if self.policy.is_denied(name):
                continue
            command = self.registry.resolve(name)
            if command is None:
                continue
            descriptions.append(
                CommandDescription(
                    name=name, description=command.description, usage=command.usage()
                )
            )
        return descriptions
