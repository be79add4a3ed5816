"""Security middleware resolving the caller identity of each request."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from cli_commander.core.common.exceptions import AuthenticationError
from cli_commander.core.config.app_config import UserConfig
from cli_commander.core.constants import HTTP_401_UNAUTHORIZED_MESSAGE
from cli_commander.core.domain.identity import CallerIdentity
from cli_commander.core.domain.permissions import Permission

logger = logging.getLogger(__name__)


def get_caller_identity(request: Request) -> CallerIdentity:
    """Return the identity resolved for ``request`` by ``CallerIdentityMiddleware``.

    Requests that did not pass through the middleware are anonymous with no
    permissions.
    """
    identity = getattr(request.state, "caller_identity", None)
    if isinstance(identity, CallerIdentity):
        return identity
    return CallerIdentity.anonymous()


def _unauthorized(error: AuthenticationError) -> JSONResponse:
    """Render a rejected credential without revealing which check failed."""
    logger.debug("Rejecting request: %s", error.message)
    return JSONResponse(
        status_code=error.status_code, content={"detail": HTTP_401_UNAUTHORIZED_MESSAGE}
    )


class CallerIdentityMiddleware(BaseHTTPMiddleware):
    """
    Middleware resolving the caller identity from an API key.

    The key is read from the ``Authorization: Bearer`` header or the
    ``api_key`` query parameter and mapped to a configured user. Requests
    without a key run as the anonymous identity unless anonymous access is
    disabled. A key that matches no user is always rejected.
    """

    def __init__(
        self,
        app: Any,
        users: Iterable[UserConfig] = (),
        anonymous_permissions: Iterable[Permission] = (Permission.READ,),
        allow_anonymous: bool = True,
        disable_auth: bool = False,
        bypass_paths: list[str] | None = None,
    ) -> None:
        super().__init__(app)
        self._principals: dict[str, CallerIdentity] = {
            user.api_key: CallerIdentity.principal(
                user.name, user.authorities, user.permissions
            )
            for user in users
        }
        self.anonymous = CallerIdentity.anonymous(anonymous_permissions)
        self.allow_anonymous = allow_anonymous
        self.disable_auth = disable_auth
        self.bypass_paths = bypass_paths or ["/docs", "/openapi.json", "/redoc"]

    def _extract_api_key(self, request: Request) -> str | None:
        auth_header: str | None = request.headers.get("Authorization")
        if auth_header and auth_header.startswith("Bearer "):
            return auth_header.replace("Bearer ", "", 1).strip() or None
        return request.query_params.get("api_key") or None

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        """
        Resolve the caller and attach it to ``request.state.caller_identity``.

        Args:
            request: The incoming request
            call_next: The next middleware or route handler

        Returns:
            The response from the next middleware or route handler
        """
        if request.url.path in self.bypass_paths or self.disable_auth:
            request.state.caller_identity = self.anonymous
            return await call_next(request)

        api_key = self._extract_api_key(request)
        client = request.client.host if request.client else "unknown"

        if api_key is None:
            if not self.allow_anonymous:
                logger.warning(
                    "Missing API key for %s %s from client %s",
                    request.method,
                    request.url.path,
                    client,
                )
                return _unauthorized(AuthenticationError("Missing API key"))
            request.state.caller_identity = self.anonymous
            return await call_next(request)

        identity = self._principals.get(api_key)
        if identity is None:
            logger.warning(
                "Invalid API key for %s %s from client %s",
                request.method,
                request.url.path,
                client,
            )
            return _unauthorized(AuthenticationError("Invalid API key"))

        logger.debug("Authenticated %s from client %s", identity.name, client)
        request.state.caller_identity = identity
        return await call_next(request)
