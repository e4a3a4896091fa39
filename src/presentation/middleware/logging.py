"""Request/response logging middleware with timing."""

import time
from typing import Callable

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from src.core.metrics import record_http_request

logger = structlog.get_logger(__name__)


def route_template(request: Request) -> str:
    """Path template of the matched route, so ids do not explode label cardinality."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class LoggingMiddleware(BaseHTTPMiddleware):
    """Logs request start, completion, and duration, and records HTTP metrics."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        method = request.method
        path = request.url.path
        query = str(request.query_params) if request.query_params else None

        log = logger.bind(
            method=method,
            path=path,
            caller_id=request.headers.get("X-Account-ID"),
        )

        log.info("request_started", query=query)

        try:
            response = await call_next(request)
            duration = time.perf_counter() - start_time

            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, route_template(request), response.status_code, duration)

            return response

        except Exception as e:
            duration = time.perf_counter() - start_time

            log.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round(duration * 1000, 2),
            )
            record_http_request(method, route_template(request), 500, duration)
            raise
