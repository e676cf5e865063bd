"""
Job queue routes.
"""

from fastapi import APIRouter, Response, status

from cloud_queue.api.dependencies import JobQueueDep
from cloud_queue.constants import (
    JOBS_PREFIX,
    SPAN_CONCLUDE_JOB,
    SPAN_DEQUEUE_JOB,
    SPAN_ENQUEUE_JOB,
    SPAN_GET_JOB,
    SPAN_GET_QUEUE,
)
from cloud_queue.observability.logging import bind_context
from cloud_queue.observability.metrics import get_metrics
from cloud_queue.observability.tracing import get_tracer
from cloud_queue.types.api import (
    ConcludeJobRequest,
    EnqueueJobRequest,
    EnqueueJobResponse,
    ErrorResponse,
    JobEnvelope,
    QueueDebugResponse,
)

router = APIRouter(prefix=JOBS_PREFIX, tags=["Jobs"])

# Served under the same prefix; must be included before `router` so that
# /jobs/debug is not captured by /jobs/{job_id}.
debug_router = APIRouter(prefix=JOBS_PREFIX, tags=["Debug"])


@router.post(
    "/enqueue",
    response_model=EnqueueJobResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Enqueue a job",
    description="Add a job to the lane matching its type.",
    responses={status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse}},
)
def enqueue_job(request: EnqueueJobRequest, queue: JobQueueDep) -> EnqueueJobResponse:
    """
    Enqueue a new job.

    Args:
        request: Job type to enqueue.
        queue: The application job queue.

    Returns:
        EnqueueJobResponse with the new job id.
    """
    with get_tracer().start_as_current_span(SPAN_ENQUEUE_JOB) as span:
        job_id = queue.enqueue(request.type)
        span.set_attribute("job.id", job_id)

    get_metrics().record_job_enqueued(request.type)

    return EnqueueJobResponse(id=job_id)


@router.get(
    "/dequeue",
    response_model=JobEnvelope,
    summary="Dequeue a job",
    description="Take the next job, time critical jobs first.",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def dequeue_job(queue: JobQueueDep) -> JobEnvelope:
    """
    Hand the next eligible job to a worker.

    Returns:
        JobEnvelope with the job, now IN_PROGRESS.
    """
    with get_tracer().start_as_current_span(SPAN_DEQUEUE_JOB) as span:
        job = queue.dequeue()
        span.set_attribute("job.id", job.id)

    get_metrics().record_job_dequeued(job.type.value)

    return JobEnvelope.from_job(job)


@router.patch(
    "/{job_id}/conclude",
    summary="Conclude a job",
    description="Mark a job concluded. A FAILED result re-queues it under a new id.",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_404_NOT_FOUND: {"model": ErrorResponse},
    },
)
def conclude_job(
    job_id: int,
    queue: JobQueueDep,
    request: ConcludeJobRequest = ConcludeJobRequest(),
) -> Response:
    """
    Conclude a job.

    Args:
        job_id: The job id.
        queue: The application job queue.
        request: The reported result.

    Returns:
        Empty 200 response.
    """
    bind_context(job_id=job_id)
    with get_tracer().start_as_current_span(SPAN_CONCLUDE_JOB) as span:
        span.set_attribute("job.id", job_id)
        span.set_attribute("job.result", request.result)
        outcome = queue.conclude(job_id, request.result)

    get_metrics().record_job_concluded(outcome)

    return Response(status_code=status.HTTP_200_OK)


@router.get(
    "/{job_id}",
    response_model=JobEnvelope,
    summary="Get job details",
    description="Get a job in any status.",
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def get_job(job_id: int, queue: JobQueueDep) -> JobEnvelope:
    """Get a job by id."""
    bind_context(job_id=job_id)
    with get_tracer().start_as_current_span(SPAN_GET_JOB) as span:
        span.set_attribute("job.id", job_id)
        job = queue.get_job(job_id)

    return JobEnvelope.from_job(job)


@debug_router.get(
    "/debug",
    response_model=QueueDebugResponse,
    summary="Inspect the queue",
    description="All known jobs partitioned by status. Not for job processing.",
)
def debug_queue(queue: JobQueueDep) -> QueueDebugResponse:
    """
    Dump the queue state for operators.

    Returns:
        QueueDebugResponse with queued, in progress and concluded jobs.
    """
    with get_tracer().start_as_current_span(SPAN_GET_QUEUE):
        snapshot = queue.get_queue()

    return QueueDebugResponse.from_snapshot(snapshot)
