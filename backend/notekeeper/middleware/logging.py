"""
Notekeeper Backend: Request Logging Middleware
================================================

What:  One access-log line per notes API request.
How:   Times the downstream handler and logs method, path, status, duration
       and the request ID set by RequestIDMiddleware.

What we log vs what we DON'T log:
    ✅ Log: method, path, status, duration, request ID
    ❌ Don't log: request bodies (note titles and text)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from notekeeper.middleware.request_id import request_id_var

logger = logging.getLogger("notekeeper.access")

# Probes hit these every few seconds
UNLOGGED_PATHS = frozenset({"/health"})


def level_for_status(status_code: int) -> int:
    """5xx → ERROR, 4xx (validation, missing note) → WARNING, else INFO."""
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in UNLOGGED_PATHS:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        logger.log(
            level_for_status(response.status_code),
            "[%s] %s %s → %d (%.1fms)",
            request_id_var.get(""),
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response
