"""
Application factory for creating the FastAPI application.

The factory wires the command registry, the command policy built from the
configured denylist, the job repository and the gateway service into
``app.state`` and registers middleware and routes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI

from cli_commander import __version__
from cli_commander.core.app.controllers.commander_controller import router as commander_router
from cli_commander.core.app.middleware_config import configure_middleware
from cli_commander.core.commands import AppCommandContext, BaseCommand, CommandRegistry
from cli_commander.core.common.logging_utils import get_logger
from cli_commander.core.config.app_config import AppConfig
from cli_commander.core.constants import COMMANDER_DISPLAY_NAME
from cli_commander.core.interfaces.job_repository_interface import IJobRepository
from cli_commander.core.repositories.in_memory_job_repository import InMemoryJobRepository
from cli_commander.core.services.command_policy import CommandPolicy
from cli_commander.core.services.commander_service import CommanderService

logger = get_logger(__name__)


def build_app(
    config: AppConfig | dict[str, Any] | None = None,
    *,
    commands: Mapping[str, type[BaseCommand]] | None = None,
    job_repository: IJobRepository | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: The application configuration (AppConfig object or dict).
            Defaults to configuration read from the environment.
        commands: Command classes keyed by name. Defaults to every command
            registered with ``@register_command``.
        job_repository: Storage for jobs. Defaults to an empty in-memory store.

    Returns:
        The FastAPI ASGI application instance.
    """
    if config is None:
        config = AppConfig.from_env()
    elif isinstance(config, dict):
        config = AppConfig(**config)
    if not isinstance(config, AppConfig):
        raise ValueError(
            f"Invalid config type: {type(config)}. Expected AppConfig or dict."
        )

    app = FastAPI(title=COMMANDER_DISPLAY_NAME, version=__version__)

    policy = CommandPolicy(config.policy.denylist())
    registry = CommandRegistry(commands, context=AppCommandContext(app))

    app.state.app_config = config
    app.state.command_policy = policy
    app.state.job_repository = job_repository or InMemoryJobRepository()
    app.state.command_registry = registry
    app.state.commander_service = CommanderService(registry, policy)

    configure_middleware(app, config)
    app.include_router(commander_router)

    logger.info(
        "Application built",
        commands=len(registry.list_names()),
        denied_commands=sorted(policy.denylist),
    )
    return app
