"""
Errors raised by the job queue.
"""

from cloud_queue.constants import (
    ERROR_INVALID_JOB_RESULT,
    ERROR_INVALID_JOB_TYPE,
    ERROR_JOB_NOT_FOUND,
    ERROR_NO_JOBS,
)


class QueueError(Exception):
    """Base exception for job queue operations."""

    code: str = "queue_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class NoJobsAvailable(QueueError):
    """Raised when dequeue is called while both lanes are empty."""

    code = ERROR_NO_JOBS

    def __init__(self) -> None:
        super().__init__("No jobs available")


class JobNotFound(QueueError):
    """Raised when a job id is unknown to the queue."""

    code = ERROR_JOB_NOT_FOUND

    def __init__(self, job_id: int):
        self.job_id = job_id
        super().__init__(f"Job {job_id} not found")


class InvalidJobType(QueueError):
    """Raised when enqueueing a job whose type matches no lane."""

    code = ERROR_INVALID_JOB_TYPE

    def __init__(self, job_type: object):
        self.job_type = job_type
        super().__init__(f"Invalid job type: {job_type!r}")


class InvalidJobResult(QueueError):
    """Raised when concluding a job with a result that is neither OK nor FAILED."""

    code = ERROR_INVALID_JOB_RESULT

    def __init__(self, result: object):
        self.result = result
        super().__init__(f"Invalid job result: {result!r}")
