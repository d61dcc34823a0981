"""
FastAPI middleware for observability.

Correlation ID and request logging middleware.

Dependencies: fastapi, starlette, ragchat.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ragchat.observability.correlation import clear_correlation_id, set_correlation_id
from ragchat.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
USER_HEADER = "X-User-Id"
# Probe traffic is logged at DEBUG
QUIET_PATH_SUFFIXES = ("/health", "/health/vector-store")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with caller, status and timing."""

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        level = logging.DEBUG if path.endswith(QUIET_PATH_SUFFIXES) else logging.INFO
        context = {
            "method": request.method,
            "path": path,
            "user_id": request.headers.get(USER_HEADER),
        }
        start = time.perf_counter()

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{request.method} {path} - Unhandled exception",
                e,
                elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
                **context,
            )
            raise

        log_with_context(
            logger,
            level,
            f"{request.method} {path} - {response.status_code}",
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - start) * 1000, 2),
            **context,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID injection."""

    async def dispatch(self, request: Request, call_next):
        """
        Inject correlation ID into request context.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response with correlation ID header
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
