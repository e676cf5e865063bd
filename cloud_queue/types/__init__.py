"""
Type definitions for the queue service.
Contains the internal job record and the API request/response models.
"""

from cloud_queue.types.api import (
    ConcludeJobRequest,
    EnqueueJobRequest,
    EnqueueJobResponse,
    ErrorResponse,
    HealthResponse,
    JobEnvelope,
    JobResponse,
    QueueDebugResponse,
)
from cloud_queue.types.job import ConcludeOutcome, Job

__all__ = [
    # API types
    "EnqueueJobRequest",
    "EnqueueJobResponse",
    "ConcludeJobRequest",
    "JobResponse",
    "JobEnvelope",
    "QueueDebugResponse",
    "HealthResponse",
    "ErrorResponse",
    # Job types
    "Job",
    "ConcludeOutcome",
]
