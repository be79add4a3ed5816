from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from cli_commander.core.common.exceptions import CommandUsageError, IllegalCommandStateError
from cli_commander.core.constants import EXIT_OK
from cli_commander.core.security.identity_context import get_current_identity

from .base import BaseCommand, register_command


@register_command
class WhoAmICommand(BaseCommand):
    name = "who-am-i"
    format = "who-am-i"
    description = "Reports your credential and permissions."
    examples = ("who-am-i",)

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        if args:
            raise CommandUsageError(f"Unexpected arguments: {' '.join(args)}")
        identity = get_current_identity()
        if identity is None:
            raise IllegalCommandStateError("No caller identity is bound")
        stdout.write(f"Authenticated as: {identity.name}\n")
        stdout.write("Authorities:\n")
        for authority in identity.authorities:
            stdout.write(f"  {authority}\n")
        return EXIT_OK
