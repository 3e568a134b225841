# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
HTTP middleware.

Every request carries an ``X-Request-ID`` (taken from the caller or minted
here) and is counted under its route template, so
``/api/v1/incidents/{incident_id}/events`` is one metric series rather than
one per incident.
"""
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.logging import get_logger
from app.metrics import HTTP_ERRORS, REQUEST_COUNT, REQUEST_LATENCY

logger = get_logger(__name__)

UNTRACKED_ROUTES = frozenset({"/health", "/health/ready", "/metrics", "/openapi.json", "/docs", "/redoc"})
REQUEST_ID_HEADER = "X-Request-ID"


def route_template(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", request.url.path)


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        return response


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        endpoint = route_template(request)
        if endpoint in UNTRACKED_ROUTES:
            return response

        status = str(response.status_code)
        REQUEST_COUNT.labels(method=request.method, endpoint=endpoint, status=status).inc()
        REQUEST_LATENCY.labels(method=request.method, endpoint=endpoint).observe(elapsed)
        if response.status_code >= 400:
            HTTP_ERRORS.labels(method=request.method, endpoint=endpoint, status=status).inc()
            logger.warning(
                "%s %s -> %s (%.1f ms)", request.method, endpoint, status, elapsed * 1000,
                extra={"request_id": getattr(request.state, "request_id", None)},
            )
        return response
