from pathlib import Path

import pytest
import yaml

from cli_commander.core.common.exceptions import ConfigurationError
from cli_commander.core.config import AppConfig, PolicyConfig, UserConfig, load_config
from cli_commander.core.config.app_config import LogLevel
from cli_commander.core.domain.permissions import Permission


def _write_yaml(path: Path, data: object) -> Path:
    with path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(data, f, sort_keys=False)
    return path


def test_defaults() -> None:
    config = AppConfig()

    assert config.host == "127.0.0.1"
    assert config.port == 8080
    assert config.auth.disable_auth is False
    assert config.auth.allow_anonymous is True
    assert config.auth.anonymous_permissions == [Permission.READ]
    assert config.policy.denylist() == frozenset({"groovysh"})
    assert config.logging.level == LogLevel.INFO


def test_from_env_reads_overrides() -> None:
    config = AppConfig.from_env(
        environ={
            "APP_HOST": "0.0.0.0",
            "APP_PORT": "9000",
            "DISABLE_AUTH": "true",
            "ALLOW_ANONYMOUS": "no",
            "DENIED_COMMANDS": "groovysh, groovy ,,",
            "LOG_LEVEL": "debug",
            "REQUEST_LOGGING": "1",
        }
    )

    assert config.host == "0.0.0.0"
    assert config.port == 9000
    assert config.auth.disable_auth is True
    assert config.auth.allow_anonymous is False
    assert config.policy.denied_commands == ["groovysh", "groovy"]
    assert config.logging.level == LogLevel.DEBUG
    assert config.logging.request_logging is True


def test_from_env_without_variables_uses_defaults() -> None:
    assert AppConfig.from_env(environ={}).model_dump() == AppConfig().model_dump()


def test_empty_denied_commands_disables_denylist() -> None:
    config = AppConfig.from_env(environ={"DENIED_COMMANDS": ""})
    assert config.policy.denylist() == frozenset()


def test_invalid_port_is_rejected() -> None:
    with pytest.raises(ValueError):
        AppConfig(port=70000)


def test_user_requires_name_and_key() -> None:
    with pytest.raises(ValueError):
        UserConfig(name="  ", api_key="key")


def test_policy_accepts_comma_separated_string() -> None:
    assert PolicyConfig(denied_commands="a, b").denied_commands == ["a", "b"]  # type: ignore[arg-type]


def test_load_config_reads_yaml(tmp_path: Path) -> None:
    path = _write_yaml(
        tmp_path / "commander.yaml",
        {
            "port": 9100,
            "auth": {
                "users": [
                    {
                        "name": "jdoe",
                        "api_key": "jdoe-key",
                        "permissions": ["read", "job.create"],
                    }
                ]
            },
            "policy": {"denied_commands": ["groovysh", "script"]},
            "logging": {"level": "WARNING"},
        },
    )

    config = load_config(path, environ={})

    assert config.port == 9100
    assert config.auth.users[0].name == "jdoe"
    assert config.auth.users[0].permissions == [Permission.READ, Permission.JOB_CREATE]
    assert config.auth.api_keys == ["jdoe-key"]
    assert config.policy.denylist() == frozenset({"groovysh", "script"})
    assert config.logging.level == LogLevel.WARNING


def test_environment_overrides_yaml(tmp_path: Path) -> None:
    path = _write_yaml(
        tmp_path / "commander.yml",
        {"port": 9100, "logging": {"level": "WARNING", "request_logging": True}},
    )

    config = load_config(path, environ={"APP_PORT": "9200", "LOG_LEVEL": "ERROR"})

    assert config.port == 9200
    assert config.logging.level == LogLevel.ERROR
    assert config.logging.request_logging is True


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "missing.yaml", environ={})


def test_load_config_rejects_non_yaml(tmp_path: Path) -> None:
    path = tmp_path / "commander.json"
    path.write_text("{}", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="Unsupported configuration file format"):
        load_config(path, environ={})


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    path = _write_yaml(tmp_path / "commander.yaml", ["groovysh"])
    with pytest.raises(ConfigurationError, match="must contain a mapping"):
        load_config(path, environ={})


def test_load_config_rejects_duplicate_api_keys(tmp_path: Path) -> None:
    path = _write_yaml(
        tmp_path / "commander.yaml",
        {
            "auth": {
                "users": [
                    {"name": "a", "api_key": "same"},
                    {"name": "b", "api_key": "same"},
                ]
            }
        },
    )
    with pytest.raises(ConfigurationError, match="Invalid configuration"):
        load_config(path, environ={})
