"""FastAPI middleware for request tracing and metrics"""

import logging
import re
import time
import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from payplus_roi.infrastructure.observability.metrics import request_duration_histogram

REQUEST_ID_HEADER = "X-Request-ID"

# Caller ids end up in logs and response headers
REQUEST_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

# Probe and scrape endpoints stay out of the latency histogram
UNTIMED_PATHS = frozenset({"/health", "/metrics"})


def resolve_request_id(header_value: str | None) -> str:
    """Reuse a well-formed caller id, otherwise mint a new one"""
    if header_value and REQUEST_ID_PATTERN.match(header_value):
        return header_value
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with an ID so the UI can correlate autosaves and calculations"""

    async def dispatch(self, request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    """Time API requests by route template and log one line per request"""

    async def dispatch(self, request: Request, call_next):
        if request.url.path in UNTIMED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration = time.perf_counter() - start_time

        # Route template, e.g. /v1/calculations/{calculation_id}
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)

        request_duration_histogram.labels(
            method=request.method,
            endpoint=endpoint,
            status=response.status_code,
        ).observe(duration)

        logging.info(
            "Request handled",
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "method": request.method,
                "endpoint": endpoint,
                "status": response.status_code,
                "duration_ms": round(duration * 1000, 2),
            },
        )
        return response
