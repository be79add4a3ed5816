"""
Common exception classes for CLI Commander.

This module defines the error taxonomy of the command gateway. Errors raised
before a command runs (empty input, denylisted or unknown command names) and
errors escaping a running command share one base class so the transport layer
can render them uniformly. Errors raised *inside* a command and reported
through its own stderr live in the second half of this module.
"""

from __future__ import annotations

from cli_commander.core.constants import (
    EXIT_ACCESS_DENIED,
    EXIT_FAILURE,
    EXIT_ILLEGAL_STATE,
    EXIT_USAGE_ERROR,
)


class CommanderError(Exception):
    """Base exception class for all gateway errors."""

    def __init__(
        self,
        message: str,
        details: dict | None = None,
        *,
        status_code: int | None = None,
        **kwargs,
    ):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error details
            status_code: Optional HTTP status code hint for transport adapters
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.status_code = status_code or 500
        for key, value in (kwargs or {}).items():
            setattr(self, key, value)


class EmptyInputError(CommanderError):
    """Raised when the command line holds no command name."""

    def __init__(
        self, message: str = "No command provided", details: dict | None = None
    ):
        super().__init__(message, details, status_code=400)


class ForbiddenCommandError(CommanderError):
    """Raised when the command name is on the denylist."""

    def __init__(self, command_name: str, details: dict | None = None):
        super().__init__(
            f"Command '{command_name}' is not supported",
            details,
            status_code=403,
            command_name=command_name,
        )
        self.command_name: str = command_name


class UnknownCommandError(CommanderError):
    """Raised when the registry has no command of the given name."""

    def __init__(self, command_name: str, details: dict | None = None):
        super().__init__(
            f"There is no such command: {command_name}",
            details,
            status_code=404,
            command_name=command_name,
        )
        self.command_name: str = command_name


class CommandExecutionError(CommanderError):
    """Raised when a resolved command raised an unhandled error while running."""

    def __init__(
        self,
        command_name: str,
        message: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(
            message or f"Command '{command_name}' failed",
            details,
            status_code=500,
            command_name=command_name,
        )
        self.command_name: str = command_name


class AuthenticationError(CommanderError):
    """Raised when a presented credential does not match any configured user."""

    def __init__(
        self,
        message: str = "Authentication failed",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=401, **kwargs)


class ConfigurationError(CommanderError):
    """Raised when there's a configuration issue."""

    def __init__(
        self,
        message: str = "Configuration error",
        details: dict | None = None,
        **kwargs,
    ):
        super().__init__(message, details, status_code=400, **kwargs)


# In-command errors --------------------------------------------------------
#
# These are raised by command implementations and converted to an exit code
# and a stderr message by ``BaseCommand.main``. They never reach the gateway.


class CommandReportedError(Exception):
    """Base class for errors a command reports through its stderr channel."""

    exit_code: int = EXIT_FAILURE

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CommandUsageError(CommandReportedError):
    """Raised when a command receives arguments it cannot parse."""

    exit_code = EXIT_USAGE_ERROR


class IllegalCommandStateError(CommandReportedError):
    """Raised when the target of a command is missing or in the wrong state."""

    exit_code = EXIT_ILLEGAL_STATE


class AccessDeniedError(CommandReportedError):
    """Raised when the ambient identity lacks a permission."""

    exit_code = EXIT_ACCESS_DENIED
