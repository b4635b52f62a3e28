from app.middleware.metrics import (
    PrometheusMiddleware,
    analysis_timer,
    record_unresolved_requirements,
    setup_metrics,
)

__all__ = [
    "PrometheusMiddleware",
    "analysis_timer",
    "record_unresolved_requirements",
    "setup_metrics",
]
