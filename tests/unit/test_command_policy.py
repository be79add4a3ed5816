import logging

import pytest

from cli_commander.core.common.exceptions import EmptyInputError, ForbiddenCommandError
from cli_commander.core.config.app_config import AppConfig
from cli_commander.core.services.command_policy import CommandPolicy, ValidatedCommand


@pytest.fixture
def policy() -> CommandPolicy:
    return CommandPolicy(AppConfig().policy.denylist())


def test_default_denylist_contains_groovysh(policy: CommandPolicy) -> None:
    assert policy.denylist == frozenset({"groovysh"})
    assert policy.is_denied("groovysh")
    assert not policy.is_denied("who-am-i")


def test_empty_tokens_are_logged_as_warning(
    policy: CommandPolicy, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING), pytest.raises(EmptyInputError):
        policy.validate([])
    assert any(
        r.levelno == logging.WARNING and "empty command line" in r.getMessage()
        for r in caplog.records
    )


def test_empty_tokens_are_rejected(policy: CommandPolicy) -> None:
    with pytest.raises(EmptyInputError) as exc_info:
        policy.validate([])
    assert exc_info.value.message == "No command provided"
    assert exc_info.value.status_code == 400


def test_denylisted_command_is_rejected(policy: CommandPolicy) -> None:
    with pytest.raises(ForbiddenCommandError) as exc_info:
        policy.validate(["groovysh", "script.groovy"])
    assert exc_info.value.message == "Command 'groovysh' is not supported"
    assert exc_info.value.command_name == "groovysh"
    assert exc_info.value.status_code == 403


def test_denylist_match_is_exact(policy: CommandPolicy) -> None:
    assert policy.validate(["groovysh2"]).name == "groovysh2"
    assert policy.validate(["GROOVYSH"]).name == "GROOVYSH"


def test_valid_tokens_split_into_name_and_args(policy: CommandPolicy) -> None:
    assert policy.validate(["delete-job", "a", "b"]) == ValidatedCommand(
        name="delete-job", args=("a", "b")
    )


def test_denylist_is_frozen_at_construction() -> None:
    source = {"groovysh"}
    policy = CommandPolicy(source)
    source.add("who-am-i")

    assert not policy.is_denied("who-am-i")
    assert isinstance(policy.denylist, frozenset)
