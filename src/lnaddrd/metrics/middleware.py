"""Prometheus request metrics for the lnaddrd HTTP API.

Exposes, per route template (never the raw path, so usernames and domains
do not become label values):

- ``http_request_total`` (counter) by method, path, status
- ``http_request_duration_seconds`` (histogram) by method, path
- ``http_requests_in_progress`` (gauge) by method
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from prometheus_client import Counter, Gauge, Histogram
from starlette.middleware.base import BaseHTTPMiddleware

if TYPE_CHECKING:
    from collections.abc import Callable

    from prometheus_client import CollectorRegistry
    from starlette.requests import Request
    from starlette.responses import Response

APP_LABEL = "lnaddrd"
UNMATCHED_PATH = "<unmatched>"


def route_template(request: Request) -> str:
    """Path template of the matched route, e.g. ``/lnaddress/{domain}/{username}``."""
    route = request.scope.get("route")
    return getattr(route, "path", UNMATCHED_PATH)


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Counts and times every request against its own registry.

    Each application gets a fresh :class:`CollectorRegistry`, so several apps
    (as in tests) never collide on metric names.
    """

    def __init__(self, app: object, *, registry: CollectorRegistry) -> None:
        super().__init__(app)  # type: ignore[arg-type]
        self._requests = Counter(
            "http_request_total",
            "Total HTTP requests",
            ("method", "path", "status_code", "app"),
            registry=registry,
        )
        self._latency = Histogram(
            "http_request_duration_seconds",
            "HTTP request duration in seconds",
            ("method", "path", "app"),
            registry=registry,
        )
        self._in_progress = Gauge(
            "http_requests_in_progress",
            "HTTP requests currently being served",
            ("method", "app"),
            registry=registry,
        )

    async def dispatch(self, request: Request, call_next: Callable) -> Response:  # type: ignore[type-arg]
        method = request.method
        in_progress = self._in_progress.labels(method=method, app=APP_LABEL)
        in_progress.inc()
        start = time.perf_counter()
        status = 500
        try:
            response: Response = await call_next(request)
            status = response.status_code
            return response
        finally:
            in_progress.dec()
            # Route is only known once routing has run inside call_next.
            path = route_template(request)
            self._requests.labels(
                method=method, path=path, status_code=str(status), app=APP_LABEL
            ).inc()
            self._latency.labels(method=method, path=path, app=APP_LABEL).observe(
                time.perf_counter() - start
            )
