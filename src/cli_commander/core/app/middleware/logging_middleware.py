from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from cli_commander.core.common.logging_utils import get_logger

logger = get_logger("api")


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log each request and the status of its response.

    Only the path is logged; query strings may carry API keys.
    """

    def __init__(self, app, log_requests: bool = True, log_responses: bool = True):
        super().__init__(app)
        self.log_requests = log_requests
        self.log_responses = log_responses

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        client = request.client.host if request.client else "unknown"

        if self.log_requests:
            logger.info(
                "Request received",
                method=request.method,
                path=request.url.path,
                client=client,
            )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=(time.perf_counter() - start) * 1000,
                exc_info=True,
            )
            raise

        if self.log_responses:
            logger.info(
                "Response sent",
                status_code=response.status_code,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
        return response
