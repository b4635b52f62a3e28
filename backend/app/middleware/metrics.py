"""
Prometheus Metrics

HTTP metrics for every request plus two engine metrics:
- skill_gap_analysis_seconds{scope}: time spent inside the gap engine,
  scope is one of career, all, summary
- skill_gap_unresolved_requirements_total: requirements dropped because
  their skill id is not in the catalog

Usage:
    setup_metrics(app)

    with analysis_timer("career"):
        analysis = analyzer.get_career_gap_analysis(slug, user_skills)

Metrics Endpoint:
    GET /metrics - Prometheus text format
"""

from contextlib import contextmanager
from typing import Callable, Iterator
import logging
import time

from fastapi import FastAPI, Request, Response
from fastapi.responses import PlainTextResponse
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.routing import Match

logger = logging.getLogger(__name__)

METRICS_PATH = "/metrics"

HTTP_LABELS = ["method", "endpoint", "status"]

REQUEST_LATENCY = Histogram(
    "skill_gap_http_request_duration_seconds",
    "HTTP request latency in seconds",
    HTTP_LABELS,
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5],
)

REQUEST_COUNT = Counter(
    "skill_gap_http_requests_total",
    "HTTP requests by route and status",
    HTTP_LABELS,
)

ACTIVE_REQUESTS = Gauge(
    "skill_gap_http_requests_active",
    "HTTP requests currently being served",
    ["method", "endpoint"],
)

ANALYSIS_LATENCY = Histogram(
    "skill_gap_analysis_seconds",
    "Time to compute skill gap analyses",
    ["scope"],
    buckets=[0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5],
)

UNRESOLVED_REQUIREMENTS = Counter(
    "skill_gap_unresolved_requirements_total",
    "Career requirements skipped because their skill is not in the catalog",
)


def route_template(request: Request) -> str:
    """
    Route pattern serving a request, e.g. /skill-gap/{career_slug}.

    Falls back to the raw path for requests no route matches.
    """
    for route in request.app.routes:
        match, _ = route.matches(request.scope)
        if match == Match.FULL:
            return route.path
    return request.url.path


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Records latency, count and in-flight gauge per route template."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        endpoint = route_template(request)
        if endpoint == METRICS_PATH:
            return await call_next(request)

        method = request.method
        in_flight = ACTIVE_REQUESTS.labels(method=method, endpoint=endpoint)
        in_flight.inc()
        status = "500"
        started = time.perf_counter()
        try:
            response = await call_next(request)
            status = str(response.status_code)
            return response
        except Exception as e:
            logger.error(f"Unhandled error on {method} {endpoint}: {e}")
            raise
        finally:
            labels = {"method": method, "endpoint": endpoint, "status": status}
            REQUEST_LATENCY.labels(**labels).observe(time.perf_counter() - started)
            REQUEST_COUNT.labels(**labels).inc()
            in_flight.dec()


def metrics_endpoint(request: Request) -> Response:
    return PlainTextResponse(content=generate_latest(REGISTRY), media_type=CONTENT_TYPE_LATEST)


def setup_metrics(app: FastAPI) -> None:
    """Install the request middleware and the /metrics route."""
    app.add_middleware(PrometheusMiddleware)
    app.add_route(METRICS_PATH, metrics_endpoint, methods=["GET"])
    logger.info("Prometheus metrics configured")


def record_analysis_latency(scope: str, duration: float) -> None:
    ANALYSIS_LATENCY.labels(scope=scope).observe(duration)


@contextmanager
def analysis_timer(scope: str) -> Iterator[None]:
    """Time a block of engine work. Failed analyses are not recorded."""
    started = time.perf_counter()
    yield
    record_analysis_latency(scope, time.perf_counter() - started)


def record_unresolved_requirements(count: int) -> None:
    """Count requirements that referenced unknown skills."""
    if count > 0:
        UNRESOLVED_REQUIREMENTS.inc(count)
