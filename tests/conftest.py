"""
Pytest configuration and shared fixtures.
"""

from collections.abc import AsyncGenerator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from cloud_queue.api.main import create_app
from cloud_queue.config import Settings
from cloud_queue.constants import JobType
from cloud_queue.core import JobQueue


@pytest.fixture
def job_queue() -> JobQueue:
    """Create an empty job queue."""
    return JobQueue()


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        log_level="DEBUG",
        log_format="console",
        otel_enabled=False,
        enable_debug_route=True,
    )


@pytest.fixture
def app(job_queue: JobQueue) -> FastAPI:
    """Create a FastAPI app serving the test queue."""
    return create_app(job_queue)


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create an async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def mixed_queue(job_queue: JobQueue) -> JobQueue:
    """
    Queue with five jobs enqueued in this order:
    1 NOT_TIME_CRITICAL, 2 TIME_CRITICAL, 3 NOT_TIME_CRITICAL,
    4 TIME_CRITICAL, 5 NOT_TIME_CRITICAL.
    """
    for job_type in (
        JobType.NOT_TIME_CRITICAL,
        JobType.TIME_CRITICAL,
        JobType.NOT_TIME_CRITICAL,
        JobType.TIME_CRITICAL,
        JobType.NOT_TIME_CRITICAL,
    ):
        job_queue.enqueue(job_type)
    return job_queue
