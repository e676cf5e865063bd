"""
API routes module.
"""

from cloud_queue.api.routes.health import router as health_router
from cloud_queue.api.routes.jobs import debug_router
from cloud_queue.api.routes.jobs import router as jobs_router

__all__ = ["jobs_router", "debug_router", "health_router"]
