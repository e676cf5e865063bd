"""
FastAPI application entry point.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware

from cloud_queue import __version__
from cloud_queue.api.errors import register_error_handlers
from cloud_queue.api.middleware import metrics_middleware
from cloud_queue.api.routes import debug_router, health_router, jobs_router
from cloud_queue.config import get_settings
from cloud_queue.core import JobQueue
from cloud_queue.observability.logging import setup_logging
from cloud_queue.observability.metrics import get_metrics, setup_metrics
from cloud_queue.observability.tracing import instrument_fastapi, setup_tracing

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Handles startup and shutdown events. Jobs live only in memory, so
    whatever is still queued at shutdown is lost.
    """
    setup_logging()
    setup_metrics()
    setup_tracing()

    logger.info("Application started")

    yield

    depth = app.state.job_queue.depth()
    logger.info(
        "Application shutdown",
        extra={"pending_jobs": sum(depth.values())},
    )


def create_app(job_queue: JobQueue | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        job_queue: Queue to serve. A fresh one is created if not provided.

    Returns:
        FastAPI: The configured application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="Cloud Stream Queue API",
        description="In-memory two-lane priority job queue",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.state.job_queue = job_queue if job_queue is not None else JobQueue()
    get_metrics().track_queue_depth(app.state.job_queue)

    app.add_middleware(BaseHTTPMiddleware, dispatch=metrics_middleware)

    register_error_handlers(app)

    app.include_router(health_router)
    if settings.enable_debug_route:
        app.include_router(debug_router)
    app.include_router(jobs_router)

    if settings.otel_enabled:
        instrument_fastapi(app)

    return app


def run() -> None:
    """Run the API server."""
    settings = get_settings()
    app = create_app()

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
