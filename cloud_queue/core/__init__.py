"""
Core module.
Contains the in-memory job queue and its errors.
"""

from cloud_queue.core.errors import (
    InvalidJobResult,
    InvalidJobType,
    JobNotFound,
    NoJobsAvailable,
    QueueError,
)
from cloud_queue.core.job_queue import JobQueue

__all__ = [
    "JobQueue",
    "QueueError",
    "NoJobsAvailable",
    "JobNotFound",
    "InvalidJobType",
    "InvalidJobResult",
]
