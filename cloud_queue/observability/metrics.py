"""
Prometheus metrics collection.
"""

from typing import TYPE_CHECKING

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

from cloud_queue.constants import (
    METRIC_API_LATENCY,
    METRIC_API_REQUESTS,
    METRIC_JOBS_CONCLUDED,
    METRIC_JOBS_DEQUEUED,
    METRIC_JOBS_ENQUEUED,
    METRIC_JOBS_RETRIED,
    METRIC_QUEUE_DEPTH,
    LANE_ORDER,
)
from cloud_queue.types.job import ConcludeOutcome

if TYPE_CHECKING:
    from cloud_queue.core.job_queue import JobQueue

# Global metrics instance
_metrics: "MetricsCollector | None" = None


class MetricsCollector:
    """
    Prometheus metrics collector for the job queue.

    Collects metrics for:
    - Lane depth
    - Enqueues, dequeues, conclusions and retries by job type
    - API requests
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize the metrics collector.

        Args:
            registry: Optional custom registry. Uses default if not provided.
        """
        self._registry = registry or REGISTRY

        self.queue_depth = Gauge(
            METRIC_QUEUE_DEPTH,
            "Number of jobs waiting in a lane",
            ["lane"],
            registry=self._registry,
        )

        self.jobs_enqueued = Counter(
            METRIC_JOBS_ENQUEUED,
            "Total number of jobs enqueued",
            ["type"],
            registry=self._registry,
        )

        self.jobs_dequeued = Counter(
            METRIC_JOBS_DEQUEUED,
            "Total number of jobs dequeued",
            ["type"],
            registry=self._registry,
        )

        self.jobs_concluded = Counter(
            METRIC_JOBS_CONCLUDED,
            "Total number of jobs concluded",
            ["type", "result"],
            registry=self._registry,
        )

        self.jobs_retried = Counter(
            METRIC_JOBS_RETRIED,
            "Total number of jobs re-queued after a failed conclude",
            ["type"],
            registry=self._registry,
        )

        self.api_requests = Counter(
            METRIC_API_REQUESTS,
            "Total number of API requests",
            ["method", "endpoint", "status"],
            registry=self._registry,
        )

        self.api_latency = Histogram(
            METRIC_API_LATENCY,
            "API request latency in seconds",
            ["method", "endpoint"],
            buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0),
            registry=self._registry,
        )

    def record_job_enqueued(self, job_type: str) -> None:
        """Record a job submission."""
        self.jobs_enqueued.labels(type=job_type).inc()

    def record_job_dequeued(self, job_type: str) -> None:
        """Record a job handed to a worker."""
        self.jobs_dequeued.labels(type=job_type).inc()

    def record_job_concluded(self, outcome: ConcludeOutcome) -> None:
        """Record a conclude that changed state, and the retry it spawned."""
        if not outcome.transitioned:
            return
        job_type = outcome.job.type.value
        self.jobs_concluded.labels(type=job_type, result=outcome.result.value).inc()
        if outcome.retried:
            self.jobs_retried.labels(type=job_type).inc()

    def track_queue_depth(self, queue: "JobQueue") -> None:
        """
        Sample lane depth from the queue at scrape time.

        Reads happen under the queue lock, so the gauge never lags behind
        a concurrent enqueue or dequeue.
        """
        for lane in LANE_ORDER:
            self.queue_depth.labels(lane=lane.value).set_function(
                lambda lane=lane: queue.depth()[lane]
            )

    def record_api_request(
        self,
        method: str,
        endpoint: str,
        status: int,
        duration_seconds: float,
    ) -> None:
        """Record an API request."""
        self.api_requests.labels(
            method=method,
            endpoint=endpoint,
            status=str(status),
        ).inc()
        self.api_latency.labels(method=method, endpoint=endpoint).observe(
            duration_seconds
        )

    def get_metrics(self) -> bytes:
        """Get all metrics in Prometheus format."""
        return generate_latest(self._registry)

    def get_content_type(self) -> str:
        """Get the content type for metrics response."""
        return CONTENT_TYPE_LATEST


def setup_metrics() -> MetricsCollector:
    """
    Set up and return the metrics collector.

    Returns:
        MetricsCollector: The metrics collector instance.
    """
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics


def get_metrics() -> MetricsCollector:
    """Get the metrics collector instance, creating it on first use."""
    if _metrics is None:
        return setup_metrics()
    return _metrics
