from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from cli_commander.core.interfaces.model_bases import InternalDTO


@dataclass(frozen=True)
class Job(InternalDTO):
    """An automation job managed through the job commands."""

    name: str
    created_by: str
    created_at: datetime

    @classmethod
    def create(cls, name: str, created_by: str) -> Job:
        return cls(name=name, created_by=created_by, created_at=datetime.now(timezone.utc))
