"""
Health check routes.
"""

from datetime import UTC, datetime

from fastapi import APIRouter
from fastapi.responses import Response

from cloud_queue import __version__
from cloud_queue.api.dependencies import JobQueueDep
from cloud_queue.observability.metrics import get_metrics
from cloud_queue.types.api import HealthResponse

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Service status and the number of jobs waiting per lane.",
)
def health_check(queue: JobQueueDep) -> HealthResponse:
    """
    Perform a health check.

    Returns:
        HealthResponse with service status and lane depths.
    """
    depth = queue.depth()
    return HealthResponse(
        status="healthy",
        version=__version__,
        queue_depth={lane.value: count for lane, count in depth.items()},
        timestamp=datetime.now(UTC),
    )


@router.get(
    "/ready",
    summary="Readiness check",
    description="Check if the service is ready to receive traffic.",
)
def readiness_check(queue: JobQueueDep) -> dict:
    """Kubernetes readiness probe endpoint."""
    return {"ready": queue is not None}


@router.get(
    "/live",
    summary="Liveness check",
    description="Check if the service is alive.",
)
async def liveness_check() -> dict:
    """Kubernetes liveness probe endpoint."""
    return {"alive": True}


@router.get(
    "/metrics",
    summary="Prometheus metrics",
    description="Expose Prometheus metrics.",
)
async def metrics() -> Response:
    """
    Expose Prometheus metrics.

    Returns:
        Prometheus-formatted metrics.
    """
    metrics_collector = get_metrics()
    return Response(
        content=metrics_collector.get_metrics(),
        media_type=metrics_collector.get_content_type(),
    )
