from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TextIO

from cli_commander.core.commands.base import BaseCommand
from cli_commander.core.domain.identity import CallerIdentity
from cli_commander.core.security.identity_context import impersonate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundExecution:
    """A command instance tied to the caller it will run as."""

    command: BaseCommand
    caller: CallerIdentity

    def call(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        """Run the command with the caller installed as the ambient identity.

        The previous ambient identity is restored when the command returns or
        raises.
        """
        with impersonate(self.caller):
            return self.command.main(args, stdin, stdout, stderr)


def bind(command: BaseCommand, caller: CallerIdentity) -> BoundExecution:
    """Bind ``command`` to ``caller``.

    Anonymous callers stay anonymous; a command never runs with an identity
    other than the one of the submitting caller.
    """
    command.transport_identity = caller
    logger.debug("Bound command %s to %s", command.name, caller.name)
    return BoundExecution(command=command, caller=caller)
