from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from cli_commander.core.common.exceptions import CommandUsageError
from cli_commander.core.constants import EXIT_OK
from cli_commander.core.domain.permissions import Permission
from cli_commander.core.security.access_control import check_permission

from .base import BaseCommand, register_command


@register_command
class ListJobsCommand(BaseCommand):
    name = "list-jobs"
    format = "list-jobs"
    description = "Lists all jobs."
    examples = ("list-jobs",)

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        if args:
            raise CommandUsageError(f"Unexpected arguments: {' '.join(args)}")
        check_permission(Permission.READ)
        for job in self._require_context().jobs.list_jobs():
            stdout.write(f"{job.name}\n")
        return EXIT_OK
