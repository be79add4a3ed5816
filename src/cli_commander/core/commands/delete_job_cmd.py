from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from cli_commander.core.common.exceptions import CommandUsageError
from cli_commander.core.constants import EXIT_ILLEGAL_STATE, EXIT_OK
from cli_commander.core.domain.permissions import Permission
from cli_commander.core.security.access_control import check_permission

from .base import BaseCommand, register_command


@register_command
class DeleteJobCommand(BaseCommand):
    name = "delete-job"
    format = "delete-job NAME..."
    description = "Deletes job(s)."
    examples = ("delete-job old-build", "delete-job a b c")

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        if not args:
            raise CommandUsageError("Expected at least one job name")
        check_permission(Permission.JOB_DELETE)

        jobs = self._require_context().jobs
        exit_code = EXIT_OK
        # keep going after a missing job; the remaining ones are still deleted
        for job_name in args:
            if jobs.delete(job_name):
                stdout.write(f"Deleted job {job_name}\n")
            else:
                stderr.write(f"ERROR: No such job '{job_name}'\n")
                exit_code = EXIT_ILLEGAL_STATE
        return exit_code
