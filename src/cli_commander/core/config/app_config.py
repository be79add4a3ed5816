from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator

from cli_commander.core.common.exceptions import ConfigurationError
from cli_commander.core.domain.permissions import Permission
from cli_commander.core.interfaces.model_bases import DomainModel

logger = logging.getLogger(__name__)

# Commands refused by the gateway unless configuration says otherwise.
# groovysh needs an interactive console the gateway cannot provide.
DEFAULT_DENIED_COMMANDS: tuple[str, ...] = ("groovysh",)


def _process_list(raw: str) -> list[str]:
    """Process a comma-separated string into a list of stripped values."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def _env_to_bool(name: str, default: bool, env: Mapping[str, str]) -> bool:
    """Return an environment variable parsed as a boolean flag."""
    value = env.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _to_int(value: str, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


class LogLevel(str, Enum):
    """Log levels for configuration."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class UserConfig(DomainModel):
    """A principal that can authenticate with an API key."""

    name: str
    api_key: str
    authorities: list[str] = Field(default_factory=list)
    permissions: list[Permission] = Field(default_factory=list)

    @field_validator("name", "api_key")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("must not be blank")
        return v.strip()


class AuthConfig(DomainModel):
    """Authentication configuration."""

    disable_auth: bool = False
    allow_anonymous: bool = True
    users: list[UserConfig] = Field(default_factory=list)
    anonymous_permissions: list[Permission] = Field(
        default_factory=lambda: [Permission.READ]
    )

    @model_validator(mode="after")
    def validate_unique_keys(self) -> AuthConfig:
        keys = [user.api_key for user in self.users]
        if len(keys) != len(set(keys)):
            raise ValueError("API keys must be unique across users")
        return self

    @property
    def api_keys(self) -> list[str]:
        return [user.api_key for user in self.users]


class PolicyConfig(DomainModel):
    """Command policy configuration."""

    denied_commands: list[str] = Field(
        default_factory=lambda: list(DEFAULT_DENIED_COMMANDS)
    )

    @field_validator("denied_commands", mode="before")
    @classmethod
    def validate_denied_commands(cls, v: Any) -> list[str]:
        if isinstance(v, str):
            return _process_list(v)
        return [str(item).strip() for item in (v or []) if str(item).strip()]

    def denylist(self) -> frozenset[str]:
        """Return the immutable denylist used by the policy gate."""
        return frozenset(self.denied_commands)


class LoggingConfig(DomainModel):
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    request_logging: bool = False
    log_file: str | None = None


class AppConfig(DomainModel):
    """Complete application configuration."""

    host: str = "127.0.0.1"
    port: int = 8080

    auth: AuthConfig = Field(default_factory=AuthConfig)
    policy: PolicyConfig = Field(default_factory=PolicyConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        if not 0 < v < 65536:
            raise ValueError("port must be between 1 and 65535")
        return v

    @classmethod
    def from_env(cls, *, environ: Mapping[str, str] | None = None) -> AppConfig:
        """Create AppConfig from environment variables.

        Only variables that are present override the defaults.
        """
        env: Mapping[str, str] = environ if environ is not None else os.environ
        return cls.model_validate(_env_overrides(env))


def _env_overrides(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect the configuration values set through environment variables."""
    config: dict[str, Any] = {}
    auth: dict[str, Any] = {}
    logging_cfg: dict[str, Any] = {}

    if "APP_HOST" in env:
        config["host"] = env["APP_HOST"]
    if "APP_PORT" in env:
        config["port"] = _to_int(env["APP_PORT"], 8080)

    if "DISABLE_AUTH" in env:
        auth["disable_auth"] = _env_to_bool("DISABLE_AUTH", False, env)
    if "ALLOW_ANONYMOUS" in env:
        auth["allow_anonymous"] = _env_to_bool("ALLOW_ANONYMOUS", True, env)
    if auth:
        config["auth"] = auth

    if "DENIED_COMMANDS" in env:
        config["policy"] = {"denied_commands": env["DENIED_COMMANDS"]}

    if "LOG_LEVEL" in env:
        logging_cfg["level"] = env["LOG_LEVEL"].strip().upper()
    if "LOG_FILE" in env:
        logging_cfg["log_file"] = env["LOG_FILE"]
    if "REQUEST_LOGGING" in env:
        logging_cfg["request_logging"] = _env_to_bool("REQUEST_LOGGING", False, env)
    if logging_cfg:
        config["logging"] = logging_cfg

    return config


def _merge_dicts(base: dict[str, Any], override: Mapping[str, Any]) -> None:
    """Recursively merge ``override`` into ``base`` in place."""
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(base.get(key), dict):
            _merge_dicts(base[key], value)
        else:
            base[key] = value


def load_config(
    config_path: str | Path | None = None,
    *,
    environ: Mapping[str, str] | None = None,
) -> AppConfig:
    """
    Load configuration from file and environment.

    Values from a ``.env`` file are loaded into the process environment
    first; environment variables override values from the YAML file.

    Args:
        config_path: Optional path to a YAML configuration file
        environ: Optional environment mapping, defaults to ``os.environ``

    Returns:
        AppConfig instance
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    config_data: dict[str, Any] = {}

    if config_path:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")
        if path.suffix.lower() not in (".yaml", ".yml"):
            raise ConfigurationError(
                f"Unsupported configuration file format: {path.suffix}. Use YAML (.yaml/.yml)."
            )
        with path.open(encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )
        _merge_dicts(config_data, file_config)
        logger.info("Loaded configuration file %s", path)

    _merge_dicts(config_data, _env_overrides(environ))

    try:
        return AppConfig.model_validate(config_data)
    except ValueError as exc:
        logger.critical("Invalid configuration: %s", exc)
        raise ConfigurationError(f"Invalid configuration: {exc}") from exc
