from __future__ import annotations

from fastapi import FastAPI

from cli_commander.core.app.exception_handlers import commander_error_handler
from cli_commander.core.app.middleware.logging_middleware import LoggingMiddleware
from cli_commander.core.common.exceptions import CommanderError
from cli_commander.core.common.logging_utils import get_logger
from cli_commander.core.config.app_config import AppConfig
from cli_commander.core.security import CallerIdentityMiddleware

logger = get_logger(__name__)


def configure_middleware(app: FastAPI, config: AppConfig) -> None:
    """Configure middleware and exception handlers for the application.

    Args:
        app: The FastAPI application
        config: The application configuration
    """
    auth_config = config.auth
    if auth_config.disable_auth:
        logger.warning("Client authentication is disabled, all callers are anonymous")
    else:
        logger.info(
            "API key authentication is enabled",
            user_count=len(auth_config.users),
            allow_anonymous=auth_config.allow_anonymous,
        )
    app.add_middleware(
        CallerIdentityMiddleware,
        users=auth_config.users,
        anonymous_permissions=auth_config.anonymous_permissions,
        allow_anonymous=auth_config.allow_anonymous,
        disable_auth=auth_config.disable_auth,
    )

    if config.logging.request_logging:
        logger.info("Request logging middleware is enabled")
        app.add_middleware(LoggingMiddleware)

    app.add_exception_handler(CommanderError, commander_error_handler)
