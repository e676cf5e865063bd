"""
Application constants.
Centralized location for all constant values used across the application.
"""

from enum import StrEnum


class JobType(StrEnum):
    """Job types. The type selects the lane a job waits in."""

    TIME_CRITICAL = "TIME_CRITICAL"
    NOT_TIME_CRITICAL = "NOT_TIME_CRITICAL"


class JobStatus(StrEnum):
    """
    Job lifecycle states.

    State transitions:
    - QUEUED -> IN_PROGRESS (dequeue)
    - IN_PROGRESS -> CONCLUDED (conclude)
    - QUEUED -> CONCLUDED (conclude before dequeue)

    CONCLUDED is terminal. A failed conclude spawns a new QUEUED job
    instead of moving the original backwards.
    """

    QUEUED = "QUEUED"
    IN_PROGRESS = "IN_PROGRESS"
    CONCLUDED = "CONCLUDED"


class JobResult(StrEnum):
    """Outcome reported by a worker when concluding a job."""

    OK = "OK"
    FAILED = "FAILED"


# Dequeue order: earlier lanes are always drained first
LANE_ORDER: tuple[JobType, ...] = (
    JobType.TIME_CRITICAL,
    JobType.NOT_TIME_CRITICAL,
)

# Error codes returned in API error bodies
ERROR_NO_JOBS = "no_jobs"
ERROR_JOB_NOT_FOUND = "job_not_found"
ERROR_INVALID_JOB_TYPE = "invalid_job_type"
ERROR_INVALID_JOB_RESULT = "invalid_job_result"

# API constants
JOBS_PREFIX = "/jobs"

# Metrics names
METRIC_QUEUE_DEPTH = "job_queue_depth"
METRIC_JOBS_ENQUEUED = "jobs_enqueued_total"
METRIC_JOBS_DEQUEUED = "jobs_dequeued_total"
METRIC_JOBS_CONCLUDED = "jobs_concluded_total"
METRIC_JOBS_RETRIED = "jobs_retried_total"
METRIC_API_REQUESTS = "api_requests_total"
METRIC_API_LATENCY = "api_request_latency_seconds"

# Trace span names
SPAN_ENQUEUE_JOB = "enqueue_job"
SPAN_DEQUEUE_JOB = "dequeue_job"
SPAN_CONCLUDE_JOB = "conclude_job"
SPAN_GET_JOB = "get_job"
SPAN_GET_QUEUE = "get_queue"
