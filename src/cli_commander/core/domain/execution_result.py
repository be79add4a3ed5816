from __future__ import annotations

from dataclasses import dataclass

from cli_commander.core.interfaces.model_bases import InternalDTO


@dataclass(frozen=True)
class ExecutionResult(InternalDTO):
    """Text captured from one command run.

    ``stderr`` is always present once a command ran to completion, even when
    it is empty. Rejected requests never produce an ``ExecutionResult``.
    """

    command_name: str
    stdout: str
    stderr: str
    exit_code: int

    @property
    def success(self) -> bool:
        return self.exit_code == 0
