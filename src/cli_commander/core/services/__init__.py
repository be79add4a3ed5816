from .command_executor import CommandExecutor
from .command_line import tokenize
from .command_policy import CommandPolicy, ValidatedCommand
from .commander_service import CommandDescription, CommanderService
from .execution_context import BoundExecution, bind

__all__ = [
    "BoundExecution",
    "CommandDescription",
    "CommandExecutor",
    "CommandPolicy",
    "CommanderService",
    "ValidatedCommand",
    "bind",
    "tokenize",
]
