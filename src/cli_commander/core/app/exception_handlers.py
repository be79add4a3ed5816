from __future__ import annotations

import logging

from fastapi import Request
from starlette.responses import JSONResponse

from cli_commander.core.common.exceptions import CommandExecutionError, CommanderError

logger = logging.getLogger(__name__)


async def commander_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render gateway errors as a single ``error`` message."""
    if not isinstance(exc, CommanderError):
        raise exc
    content: dict[str, str] = {"error": exc.message}
    if isinstance(exc, CommandExecutionError):
        content["type"] = type(exc).__name__
    else:
        logger.debug("Rejected command line: %s", exc.message)
    return JSONResponse(content, status_code=exc.status_code)
