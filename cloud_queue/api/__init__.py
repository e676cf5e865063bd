"""
API module.
Contains the FastAPI application, routes, and middleware.
"""

from cloud_queue.api.main import create_app, run

__all__ = ["create_app", "run"]
