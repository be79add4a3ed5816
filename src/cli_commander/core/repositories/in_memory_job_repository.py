from __future__ import annotations

import logging
import threading
from collections.abc import Iterable

from cli_commander.core.domain.job import Job
from cli_commander.core.interfaces.job_repository_interface import IJobRepository

logger = logging.getLogger(__name__)


class InMemoryJobRepository(IJobRepository):
    """In-memory implementation of the job repository.

    Jobs are kept in memory and not persisted. Commands run concurrently on
    worker threads, so every access is serialized by a lock.
    """

    def __init__(self, jobs: Iterable[Job] = ()) -> None:
        self._jobs: dict[str, Job] = {job.name: job for job in jobs}
        self._lock = threading.Lock()

    def get(self, name: str) -> Job | None:
        with self._lock:
            return self._jobs.get(name)

    def list_jobs(self) -> list[Job]:
        with self._lock:
            return sorted(self._jobs.values(), key=lambda job: job.name)

    def add(self, job: Job) -> bool:
        with self._lock:
            if job.name in self._jobs:
                return False
            self._jobs[job.name] = job
        logger.info("Created job %s (by %s)", job.name, job.created_by)
        return True

    def delete(self, name: str) -> bool:
        with self._lock:
            removed = self._jobs.pop(name, None)
        if removed is not None:
            logger.info("Deleted job %s", name)
        return removed is not None
