"""
Request logging middleware.

Tags every HTTP request with a correlation ID (taken from the incoming
``X-Correlation-ID`` header when present), logs method, path, status and
duration, and echoes the ID back on the response.
"""

import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from src.shared.logging import generate_correlation_id, setup_logging

logger = setup_logging("shared.observability", level="INFO")

CORRELATION_HEADER = "X-Correlation-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs one line per request, keyed by correlation ID."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(CORRELATION_HEADER) or generate_correlation_id()
        request.state.correlation_id = correlation_id
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "[%s] %s %s failed", correlation_id, request.method, request.url.path
            )
            raise

        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            "[%s] %s %s -> %d (%.1f ms)",
            correlation_id, request.method, request.url.path,
            response.status_code, elapsed_ms,
        )
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
