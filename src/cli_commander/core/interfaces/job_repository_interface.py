from __future__ import annotations

from abc import ABC, abstractmethod

from cli_commander.core.domain.job import Job


class IJobRepository(ABC):
    """Storage for jobs managed by the job commands."""

    @abstractmethod
    def get(self, name: str) -> Job | None:
        pass

    @abstractmethod
    def list_jobs(self) -> list[Job]:
        pass

    @abstractmethod
    def add(self, job: Job) -> bool:
        """Store ``job``. Returns False if a job with that name already exists."""

    @abstractmethod
    def delete(self, name: str) -> bool:
        """Delete a job. Returns False if it did not exist."""
