"""
In-memory job queue.
Implements dispatch order and the job state machine.
"""

import logging
import threading
from collections import deque

from cloud_queue.constants import LANE_ORDER, JobResult, JobStatus, JobType
from cloud_queue.core.errors import (
    InvalidJobResult,
    InvalidJobType,
    JobNotFound,
    NoJobsAvailable,
)
from cloud_queue.types.job import ConcludeOutcome, Job

logger = logging.getLogger(__name__)


class JobQueue:
    """
    Two-lane priority queue with a full job history.

    Holds:
    - A map of every job ever created, keyed by id
    - One FIFO lane of queued job ids per job type
    - A counter used to mint ids, starting at 1

    Every public method runs under a single lock, so picking a job from a
    lane and marking it in progress happen as one step.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._jobs: dict[int, Job] = {}
        self._lanes: dict[JobType, deque[int]] = {
            job_type: deque() for job_type in LANE_ORDER
        }
        self._last_id = 0

    def enqueue(self, job_type: JobType | str) -> int:
        """
        Add a new job to the tail of the lane for its type.

        Args:
            job_type: The job type.

        Returns:
            The id assigned to the new job.

        Raises:
            InvalidJobType: If the type matches no lane.
        """
        job_type = self._parse_type(job_type)
        with self._lock:
            job = self._push(job_type)

        logger.info(
            "Enqueued job",
            extra={"job_id": job.id, "job_type": job.type.value},
        )
        return job.id

    def dequeue(self) -> Job:
        """
        Take the oldest job from the highest priority non-empty lane.

        Returns:
            A copy of the job, now IN_PROGRESS.

        Raises:
            NoJobsAvailable: If both lanes are empty.
        """
        with self._lock:
            lane = next((self._lanes[t] for t in LANE_ORDER if self._lanes[t]), None)
            if lane is None:
                raise NoJobsAvailable()

            job = self._jobs[lane.popleft()]
            job.status = JobStatus.IN_PROGRESS
            dequeued = job.snapshot()

        logger.info(
            "Dequeued job",
            extra={"job_id": dequeued.id, "job_type": dequeued.type.value},
        )
        return dequeued

    def conclude(
        self,
        job_id: int,
        result: JobResult | str = JobResult.OK,
    ) -> ConcludeOutcome:
        """
        Mark a job concluded.

        A FAILED result re-queues the work as a new job of the same type,
        linked back through `retry_of`. The original always ends CONCLUDED.
        Concluding a job that is already CONCLUDED changes nothing.

        Args:
            job_id: The job id.
            result: The outcome reported by the worker, OK or FAILED in
                any letter case.

        Returns:
            ConcludeOutcome with a copy of the job and its retry, if any.

        Raises:
            InvalidJobResult: If the result is neither OK nor FAILED.
            JobNotFound: If the id is unknown.
        """
        result = self._parse_result(result)
        retry: Job | None = None

        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFound(job_id)

            if job.status == JobStatus.CONCLUDED:
                outcome = ConcludeOutcome(
                    job=job.snapshot(), result=result, transitioned=False
                )
            else:
                if job.status == JobStatus.QUEUED:
                    self._lanes[job.type].remove(job_id)

                if result == JobResult.FAILED:
                    retry = self._push(
                        job.type,
                        attempts=job.attempts + 1,
                        retry_of=job.id,
                    )

                job.status = JobStatus.CONCLUDED
                outcome = ConcludeOutcome(
                    job=job.snapshot(),
                    result=result,
                    transitioned=True,
                    retry=retry.snapshot() if retry is not None else None,
                )

        if not outcome.transitioned:
            logger.warning(
                "Job already concluded, ignoring",
                extra={"job_id": job_id, "result": result.value},
            )
            return outcome

        logger.info(
            "Concluded job",
            extra={"job_id": job_id, "result": result.value},
        )
        if outcome.retried:
            logger.info(
                "Re-queued failed job",
                extra={
                    "job_id": outcome.retry.id,
                    "retry_of": job_id,
                    "attempts": outcome.retry.attempts,
                },
            )
        return outcome

    def get_job(self, job_id: int) -> Job:
        """
        Get a job by id, regardless of status.

        Raises:
            JobNotFound: If the id is unknown.
        """
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None:
                raise JobNotFound(job_id)
            return job.snapshot()

    def get_queue(self) -> dict[int, Job]:
        """Snapshot every known job, keyed by id."""
        with self._lock:
            return {job_id: job.snapshot() for job_id, job in self._jobs.items()}

    def depth(self) -> dict[JobType, int]:
        """Number of jobs waiting in each lane."""
        with self._lock:
            return {job_type: len(lane) for job_type, lane in self._lanes.items()}

    def _push(
        self,
        job_type: JobType,
        attempts: int = 0,
        retry_of: int | None = None,
    ) -> Job:
        # Caller must hold the lock
        self._last_id += 1
        job = Job(
            id=self._last_id,
            type=job_type,
            status=JobStatus.QUEUED,
            attempts=attempts,
            retry_of=retry_of,
        )
        self._jobs[job.id] = job
        self._lanes[job_type].append(job.id)
        return job

    @staticmethod
    def _parse_type(job_type: JobType | str) -> JobType:
        try:
            return JobType(job_type)
        except ValueError:
            logger.warning("Rejected job with invalid type", extra={"job_type": str(job_type)})
            raise InvalidJobType(job_type) from None

    @staticmethod
    def _parse_result(result: JobResult | str) -> JobResult:
        try:
            return JobResult(str(result).upper())
        except ValueError:
            logger.warning("Rejected invalid job result", extra={"result": str(result)})
            raise InvalidJobResult(result) from None
