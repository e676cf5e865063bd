"""
Observability module.
Contains logging, metrics, and tracing setup.
"""

from cloud_queue.observability.logging import get_logger, setup_logging
from cloud_queue.observability.metrics import (
    MetricsCollector,
    get_metrics,
    setup_metrics,
)
from cloud_queue.observability.tracing import get_tracer, setup_tracing

__all__ = [
    "setup_logging",
    "get_logger",
    "setup_metrics",
    "get_metrics",
    "MetricsCollector",
    "setup_tracing",
    "get_tracer",
]
