from collections.abc import Iterator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from cli_commander.core.app.application_factory import build_app
from cli_commander.core.config.app_config import AppConfig
from cli_commander.core.domain.job import Job
from cli_commander.core.repositories.in_memory_job_repository import (
    InMemoryJobRepository,
)


@pytest.fixture
def app_config() -> AppConfig:
    """Configuration with one regular user and one administrator."""
    return AppConfig.model_validate(
        {
            "auth": {
                "users": [
                    {
                        "name": "jdoe",
                        "api_key": "jdoe-key",
                        "authorities": ["developers"],
                        "permissions": ["read", "job.create"],
                    },
                    {
                        "name": "admin",
                        "api_key": "admin-key",
                        "permissions": ["administer"],
                    },
                ]
            }
        }
    )


@pytest.fixture
def job_repository() -> InMemoryJobRepository:
    return InMemoryJobRepository([Job.create("delete", "admin")])


@pytest.fixture
def app(app_config: AppConfig, job_repository: InMemoryJobRepository) -> FastAPI:
    return build_app(app_config, job_repository=job_repository)


@pytest.fixture
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def jdoe_headers() -> dict[str, str]:
    return {"Authorization": "Bearer jdoe-key"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return {"Authorization": "Bearer admin-key"}
