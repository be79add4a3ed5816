"""
Logging configuration handed to uvicorn.

uvicorn's default configuration attaches its own handlers to the ``uvicorn``
loggers and stops propagation, which bypasses the handlers (and the API key
redaction filter) installed on the root logger. This configuration keeps the
uvicorn loggers handler-less so their records reach the root handlers.
Access lines include the query string, where API keys may appear.
"""

from typing import Any

UVICORN_LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "loggers": {
        "uvicorn": {"handlers": [], "propagate": True},
        "uvicorn.error": {"handlers": [], "propagate": True},
        "uvicorn.access": {"handlers": [], "propagate": True},
    },
}
