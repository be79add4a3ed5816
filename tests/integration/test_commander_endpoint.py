from collections.abc import Sequence
from typing import TextIO

import pytest
from fastapi.testclient import TestClient

from cli_commander import __version__
from cli_commander.core.app.application_factory import build_app
from cli_commander.core.commands import BaseCommand, command_registry
from cli_commander.core.config.app_config import AppConfig
from cli_commander.core.repositories.in_memory_job_repository import (
    InMemoryJobRepository,
)

ENDPOINT = "/clicommander"


class _GroovyshCommand(BaseCommand):
    name = "groovysh"
    description = "Interactive shell."
    runs = 0

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        type(self).runs += 1
        return 0


class _ExplodingCommand(BaseCommand):
    name = "explode"
    description = "Always fails."

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        raise RuntimeError("kaboom")


class _ExitingCommand(BaseCommand):
    name = "exiting"

    def run(
        self, args: Sequence[str], stdin: TextIO, stdout: TextIO, stderr: TextIO
    ) -> int:
        raise SystemExit(2)


class _BadExitCodeCommand(BaseCommand):
    name = "bad-exit"

    def run(self, args, stdin, stdout, stderr):  # type: ignore[no-untyped-def]
        return "oops"


@pytest.fixture
def custom_client(app_config: AppConfig) -> TestClient:
    commands = {
        **command_registry,
        "groovysh": _GroovyshCommand,
        "explode": _ExplodingCommand,
        "exiting": _ExitingCommand,
        "bad-exit": _BadExitCodeCommand,
    }
    return TestClient(build_app(app_config, commands=commands))


def test_anonymous_who_am_i(client: TestClient) -> None:
    response = client.post(ENDPOINT, data={"commandLine": "who-am-i"})

    assert response.status_code == 200
    assert response.json() == {
        "stdout": "Authenticated as: anonymous\nAuthorities:\n  anonymous\n",
        "stderr": "",
        "exitCode": 0,
    }


def test_authenticated_who_am_i(client: TestClient, jdoe_headers: dict[str, str]) -> None:
    response = client.post(
        ENDPOINT, data={"commandLine": "who-am-i"}, headers=jdoe_headers
    )

    assert response.status_code == 200
    body = response.json()
    assert "error" not in body
    assert "Authenticated as: jdoe" in body["stdout"]
    assert "  authenticated\n" in body["stdout"]
    assert "  developers\n" in body["stdout"]
    assert body["stderr"] == ""


def test_api_key_query_parameter(client: TestClient) -> None:
    response = client.post(
        ENDPOINT, params={"api_key": "jdoe-key"}, data={"commandLine": "who-am-i"}
    )
    assert response.json()["stdout"].startswith("Authenticated as: jdoe\n")


@pytest.mark.parametrize("command_line", ["", "   "])
def test_blank_command_line(client: TestClient, command_line: str) -> None:
    response = client.post(ENDPOINT, data={"commandLine": command_line})

    assert response.status_code == 400
    assert response.json() == {"error": "No command provided"}


def test_missing_command_line_field(client: TestClient) -> None:
    response = client.post(ENDPOINT)

    assert response.status_code == 400
    assert response.json() == {"error": "No command provided"}


def test_denylisted_command(client: TestClient) -> None:
    response = client.post(ENDPOINT, data={"commandLine": "groovysh"})

    assert response.status_code == 403
    assert response.json() == {"error": "Command 'groovysh' is not supported"}


def test_denylisted_command_is_refused_even_when_registered(
    custom_client: TestClient,
) -> None:
    _GroovyshCommand.runs = 0
    response = custom_client.post(ENDPOINT, data={"commandLine": "groovysh -e 1"})

    assert response.status_code == 403
    assert "groovysh" in response.json()["error"]
    assert "stdout" not in response.json()
    assert _GroovyshCommand.runs == 0


def test_unknown_command(client: TestClient) -> None:
    response = client.post(ENDPOINT, data={"commandLine": "frobnicate"})

    assert response.status_code == 404
    assert response.json() == {"error": "There is no such command: frobnicate"}


def test_command_exception_is_distinct_failure(custom_client: TestClient) -> None:
    response = custom_client.post(ENDPOINT, data={"commandLine": "explode"})

    assert response.status_code == 500
    body = response.json()
    assert body["type"] == "CommandExecutionError"
    assert "kaboom" in body["error"]
    assert "stdout" not in body


@pytest.mark.parametrize("command_line", ["exiting", "bad-exit"])
def test_abnormal_command_end_is_structured_failure(
    custom_client: TestClient, command_line: str
) -> None:
    response = custom_client.post(ENDPOINT, data={"commandLine": command_line})

    assert response.status_code == 500
    assert response.headers["content-type"] == "application/json"
    body = response.json()
    assert body["type"] == "CommandExecutionError"
    assert body["error"].startswith(f"Command '{command_line}' failed")


def test_permission_failure_runs_as_anonymous(
    client: TestClient, job_repository: InMemoryJobRepository
) -> None:
    response = client.post(ENDPOINT, data={"commandLine": "delete-job delete"})

    assert response.status_code == 200
    body = response.json()
    assert body["exitCode"] == 6
    assert body["stdout"] == ""
    assert "anonymous is missing the job.delete permission" in body["stderr"]
    assert job_repository.get("delete") is not None


def test_admin_can_delete_job(
    client: TestClient,
    admin_headers: dict[str, str],
    job_repository: InMemoryJobRepository,
) -> None:
    response = client.post(
        ENDPOINT, data={"commandLine": "delete-job delete"}, headers=admin_headers
    )

    assert response.json() == {
        "stdout": "Deleted job delete\n",
        "stderr": "",
        "exitCode": 0,
    }
    assert job_repository.get("delete") is None


def test_created_job_is_owned_by_caller(
    client: TestClient,
    jdoe_headers: dict[str, str],
    job_repository: InMemoryJobRepository,
) -> None:
    response = client.post(
        ENDPOINT, data={"commandLine": "create-job  weekly "}, headers=jdoe_headers
    )

    assert response.json()["stdout"] == "Created job weekly\n"
    job = job_repository.get("weekly")
    assert job is not None
    assert job.created_by == "jdoe"


def test_command_line_from_query_string(client: TestClient) -> None:
    response = client.post(ENDPOINT, params={"commandLine": "version"})

    assert response.status_code == 200
    assert response.json()["stdout"] == f"{__version__}\n"


def test_form_field_wins_over_query_string(client: TestClient) -> None:
    response = client.post(
        ENDPOINT, params={"commandLine": "version"}, data={"commandLine": "who-am-i"}
    )
    assert response.json()["stdout"].startswith("Authenticated as: anonymous")


def test_trailing_slash(client: TestClient) -> None:
    response = client.post(f"{ENDPOINT}/", data={"commandLine": "version"})
    assert response.status_code == 200


@pytest.mark.parametrize(
    "value, expected",
    [
        ("who", ["who-am-i"]),
        ("delete", ["delete-job"]),
        ("nothing", []),
        ("who-am-i ", []),
        ("help delete-job", []),
    ],
)
def test_auto_complete(client: TestClient, value: str, expected: list[str]) -> None:
    response = client.get(
        f"{ENDPOINT}/autoCompleteCommandLine", params={"value": value}
    )

    assert response.status_code == 200
    assert response.json() == {"suggestions": expected}


def test_auto_complete_without_value_lists_all(client: TestClient) -> None:
    suggestions = client.get(f"{ENDPOINT}/autoCompleteCommandLine").json()["suggestions"]
    assert suggestions == sorted(suggestions)
    assert {"help", "who-am-i", "delete-job"} <= set(suggestions)


def test_command_listing_hides_denylisted(custom_client: TestClient) -> None:
    response = custom_client.get(f"{ENDPOINT}/commands")

    assert response.status_code == 200
    commands = {c["name"]: c for c in response.json()["commands"]}
    assert "groovysh" not in commands
    assert commands["create-job"]["usage"] == "create-job NAME"
    assert commands["explode"]["description"] == "Always fails."


def test_help_over_http(client: TestClient) -> None:
    response = client.post(ENDPOINT, data={"commandLine": "help who-am-i"})

    assert response.status_code == 200
    assert response.json()["stdout"].startswith("who-am-i: ")
