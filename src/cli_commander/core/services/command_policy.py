from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from cli_commander.core.common.exceptions import EmptyInputError, ForbiddenCommandError
from cli_commander.core.interfaces.model_bases import InternalDTO

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatedCommand(InternalDTO):
    name: str
    args: tuple[str, ...]


class CommandPolicy:
    """Reject command lines before any command is resolved.

    The denylist is frozen when the policy is created and cannot be changed
    afterwards.
    """

    def __init__(self, denylist: Iterable[str] = ()) -> None:
        self._denylist: frozenset[str] = frozenset(denylist)

    @property
    def denylist(self) -> frozenset[str]:
        return self._denylist

    def is_denied(self, name: str) -> bool:
        return name in self._denylist

    def validate(self, tokens: Sequence[str]) -> ValidatedCommand:
        """Validate a token sequence.

        Raises:
            EmptyInputError: If there are no tokens.
            ForbiddenCommandError: If the command name is denylisted.
        """
        if not tokens:
            logger.warning("Rejected empty command line")
            raise EmptyInputError()
        name = tokens[0]
        if self.is_denied(name):
            logger.warning("Rejected denylisted command %s", name)
            raise ForbiddenCommandError(name)
        return ValidatedCommand(name=name, args=tuple(tokens[1:]))
