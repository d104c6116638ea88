"""
Request tracing middleware.

Every request gets a request id (taken from the X-Request-ID header when the
caller sends one) that is bound into the structlog context together with the
search parameters, so all log lines of one search can be correlated.
Health checks are logged at debug level to keep the access log readable.
"""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from core.logging import bind_context, clear_context, get_logger


logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

HEALTH_PATHS = frozenset({"/health", "/health/detailed", "/ready", "/live"})

# Query parameters worth having on every log line of a search request
TRACED_PARAMS = {"q": "q", "category": "category", "sortBy": "sort_by", "page": "page"}


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Bind request context, time the request and echo the request id."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        path = request.url.path

        bind_context(request_id=request_id, method=request.method, path=path)
        traced = {
            name: request.query_params[param]
            for param, name in TRACED_PARAMS.items()
            if request.query_params.get(param)
        }
        if traced:
            bind_context(**traced)

        log = logger.debug if path in HEALTH_PATHS else logger.info
        started = time.perf_counter()
        log("Request started")

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=_elapsed_ms(started),
            )
            raise
        else:
            log(
                "Request completed",
                status_code=response.status_code,
                duration_ms=_elapsed_ms(started),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_context()


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)
