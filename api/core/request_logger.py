"""
Access logging for the parse API.

One line per request with method, path, status, timing and the size of
the submitted configuration body.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("nginx_conftree.access")

# Documentation and status pages are not logged
_EXCLUDED_PATHS = {"/docs", "/redoc", "/openapi.json", "/"}


def _request_size(request: Request) -> str:
    """Declared body size in bytes, or '-' when the client sent none."""
    length = request.headers.get("content-length")
    return length if length and length.isdigit() else "-"


class RequestLoggerMiddleware(BaseHTTPMiddleware):
    """Logs each parse request with its body size and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:
        path = request.url.path
        if path in _EXCLUDED_PATHS:
            return await call_next(request)

        start = time.monotonic()
        response: Response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000

        logger.info(
            "%s %s %d %.1fms bytes=%s client=%s",
            request.method,
            path,
            response.status_code,
            duration_ms,
            _request_size(request),
            request.client.host if request.client else "unknown",
        )
        return response
