from __future__ import annotations

from enum import Enum


class Permission(str, Enum):
    """Permissions checked by commands against the ambient caller identity."""

    READ = "read"
    JOB_CREATE = "job.create"
    JOB_DELETE = "job.delete"
    # implies every other permission
    ADMINISTER = "administer"
