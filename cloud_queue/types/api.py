"""
API request and response type definitions.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from cloud_queue.constants import JobResult, JobStatus, JobType
from cloud_queue.types.job import Job


class EnqueueJobRequest(BaseModel):
    """Request body for enqueueing a job."""

    # Plain string so unknown types reach the queue and fail as invalid_job_type
    type: str = Field(..., description="TIME_CRITICAL or NOT_TIME_CRITICAL")


class EnqueueJobResponse(BaseModel):
    """Response body after enqueueing a job."""

    id: int


class ConcludeJobRequest(BaseModel):
    """Request body for concluding a job."""

    # Plain string so the queue owns result parsing, as with job types
    result: str = Field(
        default=JobResult.OK.value,
        description="OK or FAILED, any case. FAILED re-queues the job under a new id",
    )


class JobResponse(BaseModel):
    """Job record as exposed over the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: JobType
    status: JobStatus
    attempts: int
    retry_of: int | None = None


class JobEnvelope(BaseModel):
    """Single job wrapped in a `job` key."""

    job: JobResponse

    @classmethod
    def from_job(cls, job: Job) -> "JobEnvelope":
        return cls(job=JobResponse.model_validate(job))


class QueueDebugResponse(BaseModel):
    """All known jobs partitioned by status."""

    queued: list[JobResponse] = Field(default_factory=list)
    in_progress: list[JobResponse] = Field(default_factory=list)
    concluded: list[JobResponse] = Field(default_factory=list)

    @classmethod
    def from_snapshot(cls, jobs: dict[int, Job]) -> "QueueDebugResponse":
        """Partition a queue snapshot into status buckets, ordered by id."""
        response = cls()
        buckets = {
            JobStatus.QUEUED: response.queued,
            JobStatus.IN_PROGRESS: response.in_progress,
            JobStatus.CONCLUDED: response.concluded,
        }
        for job_id in sorted(jobs):
            job = jobs[job_id]
            buckets[job.status].append(JobResponse.model_validate(job))
        return response


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    queue_depth: dict[str, int]
    timestamp: datetime


class ErrorResponse(BaseModel):
    """Standard error response."""

    code: str
    detail: str | None = None
