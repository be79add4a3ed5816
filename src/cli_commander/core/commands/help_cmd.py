from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from cli_commander.core.common.exceptions import CommandUsageError, IllegalCommandStateError
from cli_commander.core.constants import EXIT_OK

from .base import BaseCommand, register_command


@register_command
class HelpCommand(BaseCommand):
    name = "help"
    format = "help [COMMAND]"
    description = "Lists all the available commands or a detailed description of single command."
    examples = ("help", "help delete-job")

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        context = self._require_context()
        if len(args) > 1:
            raise CommandUsageError("Too many arguments")

        if args:
            cmd_name = args[0]
            command = None
            if not context.is_command_denied(cmd_name):
                command = context.registry.resolve(cmd_name)
            if command is None:
                raise IllegalCommandStateError(f"No such command {cmd_name}")
            stdout.write(f"{command.name}: {command.description}\n")
            stdout.write(f"Usage: {command.usage()}\n")
            if command.examples:
                stdout.write("Examples: " + "; ".join(command.examples) + "\n")
            return EXIT_OK

        for name in context.registry.list_names():
            if context.is_command_denied(name):
                continue
            command = context.registry.resolve(name)
            stdout.write(f"  {name}\n")
            if command is not None and command.description:
                stdout.write(f"    {command.description}\n")
        return EXIT_OK
