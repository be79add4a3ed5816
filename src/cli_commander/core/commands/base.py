from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol, TextIO

from cli_commander.core.common.exceptions import CommandReportedError, CommandUsageError

if TYPE_CHECKING:
    from fastapi import FastAPI

    from cli_commander.core.domain.identity import CallerIdentity
    from cli_commander.core.interfaces.command_registry_interface import (
        ICommandRegistry,
    )
    from cli_commander.core.interfaces.job_repository_interface import IJobRepository

logger = logging.getLogger(__name__)


class CommandContext(Protocol):
    """Protocol for command execution context to decouple commands from FastAPI app."""

    @property
    def jobs(self) -> IJobRepository:
        """Get the job repository."""
        ...

    @property
    def registry(self) -> ICommandRegistry:
        """Get the command registry."""
        ...

    def is_command_denied(self, name: str) -> bool:
        """Return True if the gateway refuses to run ``name``."""
        ...


class AppCommandContext:
    """Concrete implementation of CommandContext that wraps FastAPI app state."""

    def __init__(self, app: FastAPI) -> None:
        self.app = app

    @property
    def jobs(self) -> IJobRepository:
        return self.app.state.job_repository  # type: ignore[no-any-return]

    @property
    def registry(self) -> ICommandRegistry:
        return self.app.state.command_registry  # type: ignore[no-any-return]

    def is_command_denied(self, name: str) -> bool:
        return bool(self.app.state.command_policy.is_denied(name))


class BaseCommand:
    """Base class for gateway commands.

    A command instance is created for a single run and discarded afterwards,
    so subclasses may keep per-run state on ``self``.
    """

    # command name used on the command line
    name: str
    # short string describing command syntax
    format: str = ""
    # human friendly description
    description: str = ""
    # usage examples
    examples: tuple[str, ...] = ()

    def __init__(self, context: CommandContext | None = None) -> None:
        self.context = context
        # identity of the caller that submitted the command line
        self.transport_identity: CallerIdentity | None = None

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        raise NotImplementedError

    def main(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        """Run the command and turn reported errors into an exit code.

        Errors derived from ``CommandReportedError`` are written to ``stderr``.
        Any other exception propagates to the caller.
        """
        try:
            return self.run(list(args), stdin, stdout, stderr)
        except CommandReportedError as e:
            logger.info("Command %s reported: %s", self.name, e.message)
            stderr.write(f"ERROR: {e.message}\n")
            if isinstance(e, CommandUsageError) and self.format:
                stderr.write(f"Usage: {self.format}\n")
            return e.exit_code

    def usage(self) -> str:
        return self.format or self.name

    def _require_context(self) -> CommandContext:
        if self.context is None:
            raise RuntimeError(f"Command '{self.name}' needs a command context")
        return self.context


# Registry -----------------------------------------------------------------
command_registry: dict[str, type[BaseCommand]] = {}


def register_command(cls: type[BaseCommand]) -> type[BaseCommand]:
    """Class decorator to register a command in the global registry."""
    if cls.name in command_registry and command_registry[cls.name] is not cls:
        raise ValueError(f"Command '{cls.name}' is already registered.")
    command_registry[cls.name] = cls
    return cls
