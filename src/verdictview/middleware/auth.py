"""
API Token Authentication Middleware.

Protects /v1/* routes with Bearer token authentication.
Public endpoints (/health, docs) are not protected.
"""

import logging
from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from verdictview.config import get_settings

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class APITokenMiddleware(BaseHTTPMiddleware):
    """
    Middleware that enforces API token authentication for /v1/* routes.

    - Requires Authorization: Bearer <API_TOKEN> header
    - Disabled entirely when no API token is configured
    - Returns 401 Unauthorized if token is missing or invalid
    """

    PUBLIC_PATHS = frozenset([
        "/health",
        "/docs",
        "/openapi.json",
        "/redoc",
    ])

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process the request and check authentication for protected routes."""
        path = request.url.path

        if path in self.PUBLIC_PATHS or not path.startswith("/v1"):
            return await call_next(request)

        settings = get_settings()

        # No token configured: dev mode
        if not settings.api_token:
            return await call_next(request)

        auth_header = request.headers.get("Authorization")

        if not auth_header:
            logger.warning(f"Missing Authorization header for {path}")
            return self._unauthorized("Missing Authorization header")

        if not auth_header.startswith(BEARER_PREFIX):
            logger.warning(f"Invalid Authorization format for {path}")
            return self._unauthorized("Invalid Authorization format. Use: Bearer <token>")

        token = auth_header[len(BEARER_PREFIX):]
        if token != settings.api_token:
            logger.warning(f"Invalid API token for {path}")
            return self._unauthorized("Invalid API token")

        return await call_next(request)

    @staticmethod
    def _unauthorized(detail: str) -> JSONResponse:
        return JSONResponse(status_code=401, content={"detail": detail})
