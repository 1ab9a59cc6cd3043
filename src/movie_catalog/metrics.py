"""Prometheus metrics for the catalog service.

All collectors live in the default registry for the lifetime of the
process and are exposed at ``GET /metrics``.
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

SOURCE_DIRECT = "direct"
SOURCE_IMDB = "imdb"

movies_created_total = Counter(
    "movies_created_total",
    "Number of movies created, by how they were created",
    ["source"],
)
# Expose both series at 0 before the first creation
for _source in (SOURCE_DIRECT, SOURCE_IMDB):
    movies_created_total.labels(source=_source)

http_requests_total = Counter(
    "http_requests_total",
    "Number of HTTP requests handled",
    ["method", "route", "status_code"],
)

http_request_duration_seconds = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "route", "status_code"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10),
)


def record_movie_created(source: str) -> None:
    """Count one created movie for the given provenance label."""
    movies_created_total.labels(source=source).inc()


async def metrics_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Record request count and latency per route template."""
    start = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        route = request.scope.get("route")
        # Unmatched paths share one label to keep cardinality bounded
        route_label = getattr(route, "path", "unmatched")
        labels = {
            "method": request.method,
            "route": route_label,
            "status_code": str(status_code),
        }
        http_requests_total.labels(**labels).inc()
        http_request_duration_seconds.labels(**labels).observe(time.perf_counter() - start)


def metrics_response() -> Response:
    """Render the default registry in the Prometheus text format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
