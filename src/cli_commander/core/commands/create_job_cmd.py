from __future__ import annotations

from collections.abc import Sequence
from typing import TextIO

from cli_commander.core.common.exceptions import CommandUsageError, IllegalCommandStateError
from cli_commander.core.constants import EXIT_OK
from cli_commander.core.domain.job import Job
from cli_commander.core.domain.permissions import Permission
from cli_commander.core.security.access_control import check_permission

from .base import BaseCommand, register_command


@register_command
class CreateJobCommand(BaseCommand):
    name = "create-job"
    format = "create-job NAME"
    description = "Creates a new job."
    examples = ("create-job nightly-build",)

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        if len(args) != 1:
            raise CommandUsageError("Expected exactly one job name")
        identity = check_permission(Permission.JOB_CREATE)
        job_name = args[0]
        if not self._require_context().jobs.add(Job.create(job_name, identity.name)):
            raise IllegalCommandStateError(f"Job '{job_name}' already exists")
        stdout.write(f"Created job {job_name}\n")
        return EXIT_OK
