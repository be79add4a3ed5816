from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from cli_commander import __version__
from cli_commander.core.constants import EXIT_OK

from .base import BaseCommand, register_command


@register_command
class VersionCommand(BaseCommand):
    name = "version"
    format = "version"
    description = "Outputs the current version."
    examples = ("version",)

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        stdout.write(f"{__version__}\n")
        return EXIT_OK
