"""
Job-related type definitions for internal use.
"""

from dataclasses import dataclass, replace

from cloud_queue.constants import JobResult, JobStatus, JobType


@dataclass
class Job:
    """
    Metadata of a single job.

    Records are owned by the JobQueue. Everything handed out of the queue
    is a copy produced by `snapshot`.
    """

    id: int
    type: JobType
    status: JobStatus = JobStatus.QUEUED
    attempts: int = 0
    retry_of: int | None = None

    def snapshot(self) -> "Job":
        """Return a detached copy of this record."""
        return replace(self)


@dataclass
class ConcludeOutcome:
    """
    What a conclude call did.

    `transitioned` is False when the job was already concluded and the
    call changed nothing.
    """

    job: Job
    result: JobResult
    transitioned: bool
    retry: Job | None = None

    @property
    def retried(self) -> bool:
        """Check if the conclude re-queued the work."""
        return self.retry is not None
