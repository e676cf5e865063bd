"""
Unit tests for the in-memory job queue.
"""

import pytest

from cloud_queue.constants import JobResult, JobStatus, JobType
from cloud_queue.core import (
    InvalidJobResult,
    InvalidJobType,
    JobNotFound,
    JobQueue,
    NoJobsAvailable,
)


class TestEnqueue:
    """Tests for JobQueue.enqueue."""

    def test_enqueue_first_job(self, job_queue: JobQueue):
        """Test the first job gets id 1 and is queued."""
        job_id = job_queue.enqueue(JobType.TIME_CRITICAL)

        assert job_id == 1
        job = job_queue.get_job(1)
        assert job.type == JobType.TIME_CRITICAL
        assert job.status == JobStatus.QUEUED
        assert job.attempts == 0
        assert job.retry_of is None

    def test_ids_increase_without_gaps(self, job_queue: JobQueue):
        """Test ids are assigned 1..n in enqueue order."""
        ids = [
            job_queue.enqueue(job_type)
            for job_type in [JobType.NOT_TIME_CRITICAL, JobType.TIME_CRITICAL] * 5
        ]

        assert ids == list(range(1, 11))

    def test_enqueue_accepts_type_name(self, job_queue: JobQueue):
        """Test plain strings are accepted when they name a type."""
        job_id = job_queue.enqueue("NOT_TIME_CRITICAL")

        assert job_queue.get_job(job_id).type == JobType.NOT_TIME_CRITICAL

    @pytest.mark.parametrize("job_type", ["URGENT", "time_critical", "", None])
    def test_enqueue_invalid_type(self, job_queue: JobQueue, job_type):
        """Test unknown types are rejected and leave no trace."""
        with pytest.raises(InvalidJobType):
            job_queue.enqueue(job_type)

        assert job_queue.get_queue() == {}
        # The counter was not advanced either
        assert job_queue.enqueue(JobType.TIME_CRITICAL) == 1

    def test_enqueue_updates_lane_depth(self, mixed_queue: JobQueue):
        """Test each job lands in the lane for its type."""
        assert mixed_queue.depth() == {
            JobType.TIME_CRITICAL: 2,
            JobType.NOT_TIME_CRITICAL: 3,
        }


class TestDequeue:
    """Tests for JobQueue.dequeue."""

    def test_dequeue_empty_queue(self, job_queue: JobQueue):
        """Test dequeue on an empty queue fails."""
        with pytest.raises(NoJobsAvailable):
            job_queue.dequeue()

    def test_dequeue_empty_leaves_state_unchanged(self, mixed_queue: JobQueue):
        """Test a failed dequeue does not touch any job."""
        for _ in range(5):
            mixed_queue.dequeue()
        before = mixed_queue.get_queue()

        with pytest.raises(NoJobsAvailable):
            mixed_queue.dequeue()

        assert mixed_queue.get_queue() == before

    def test_critical_lane_first(self, mixed_queue: JobQueue):
        """Test time critical jobs are served before older non critical ones."""
        order = [mixed_queue.dequeue().id for _ in range(5)]

        assert order == [2, 4, 1, 3, 5]

    def test_fifo_within_lane(self, job_queue: JobQueue):
        """Test dequeue order equals enqueue order inside one lane."""
        ids = [job_queue.enqueue(JobType.NOT_TIME_CRITICAL) for _ in range(4)]

        assert [job_queue.dequeue().id for _ in range(4)] == ids

    def test_dequeue_marks_in_progress(self, mixed_queue: JobQueue):
        """Test the returned job and the stored record are IN_PROGRESS."""
        job = mixed_queue.dequeue()

        assert job.status == JobStatus.IN_PROGRESS
        assert mixed_queue.get_job(job.id).status == JobStatus.IN_PROGRESS

    def test_dequeue_removes_from_lane(self, mixed_queue: JobQueue):
        """Test a dequeued job is never handed out again."""
        first = mixed_queue.dequeue()

        assert mixed_queue.depth()[JobType.TIME_CRITICAL] == 1
        remaining = [mixed_queue.dequeue().id for _ in range(4)]
        assert first.id not in remaining

    def test_dequeue_returns_copy(self, mixed_queue: JobQueue):
        """Test mutating a returned job does not affect the queue."""
        job = mixed_queue.dequeue()
        job.status = JobStatus.CONCLUDED
        job.attempts = 99

        stored = mixed_queue.get_job(job.id)
        assert stored.status == JobStatus.IN_PROGRESS
        assert stored.attempts == 0


class TestConclude:
    """Tests for JobQueue.conclude."""

    def test_conclude_success(self, mixed_queue: JobQueue):
        """Test an OK result concludes the job without re-queueing."""
        job = mixed_queue.dequeue()

        outcome = mixed_queue.conclude(job.id, JobResult.OK)

        assert outcome.transitioned is True
        assert outcome.result == JobResult.OK
        assert outcome.retry is None
        assert outcome.job.status == JobStatus.CONCLUDED
        assert mixed_queue.get_job(job.id).status == JobStatus.CONCLUDED
        assert len(mixed_queue.get_queue()) == 5

    def test_conclude_defaults_to_ok(self, mixed_queue: JobQueue):
        """Test conclude without a result counts as success."""
        job = mixed_queue.dequeue()

        assert mixed_queue.conclude(job.id).result == JobResult.OK
        assert mixed_queue.get_job(job.id).status == JobStatus.CONCLUDED

    def test_conclude_failed_requeues(self, mixed_queue: JobQueue):
        """Test a FAILED result spawns exactly one new queued job."""
        job = mixed_queue.dequeue()

        outcome = mixed_queue.conclude(job.id, JobResult.FAILED)

        assert outcome.retried
        retry_id = outcome.retry.id
        assert retry_id == 6
        jobs = mixed_queue.get_queue()
        assert len(jobs) == 6
        assert jobs[job.id].status == JobStatus.CONCLUDED
        retry = jobs[retry_id]
        assert retry.status == JobStatus.QUEUED
        assert retry.type == job.type
        assert retry.attempts == 1
        assert retry.retry_of == job.id

    def test_retry_attempts_accumulate(self, job_queue: JobQueue):
        """Test each retry of a retry increments attempts."""
        job_queue.enqueue(JobType.NOT_TIME_CRITICAL)

        for expected_attempts in (1, 2, 3):
            job = job_queue.dequeue()
            retry_id = job_queue.conclude(job.id, "FAILED").retry.id
            assert job_queue.get_job(retry_id).attempts == expected_attempts

    def test_retry_goes_to_lane_tail(self, job_queue: JobQueue):
        """Test a retry waits behind jobs already in its lane."""
        first = job_queue.enqueue(JobType.TIME_CRITICAL)
        second = job_queue.enqueue(JobType.TIME_CRITICAL)

        job_queue.dequeue()
        retry_id = job_queue.conclude(first, JobResult.FAILED).retry.id

        assert job_queue.dequeue().id == second
        assert job_queue.dequeue().id == retry_id

    def test_conclude_unknown_job(self, mixed_queue: JobQueue):
        """Test concluding an unknown id fails and changes nothing."""
        before = mixed_queue.get_queue()
        depth = mixed_queue.depth()

        with pytest.raises(JobNotFound):
            mixed_queue.conclude(42, JobResult.FAILED)

        assert mixed_queue.get_queue() == before
        assert mixed_queue.depth() == depth
        assert mixed_queue.enqueue(JobType.TIME_CRITICAL) == 6

    def test_conclude_queued_job_withdraws_it(self, mixed_queue: JobQueue):
        """Test a job concluded before dequeue leaves its lane."""
        mixed_queue.conclude(2)

        assert mixed_queue.get_job(2).status == JobStatus.CONCLUDED
        assert mixed_queue.depth()[JobType.TIME_CRITICAL] == 1
        assert mixed_queue.dequeue().id == 4

    def test_conclude_twice_is_noop(self, mixed_queue: JobQueue):
        """Test a concluded job stays concluded and spawns no second retry."""
        job = mixed_queue.dequeue()
        mixed_queue.conclude(job.id, JobResult.FAILED)
        before = mixed_queue.get_queue()

        outcome = mixed_queue.conclude(job.id, JobResult.FAILED)

        assert outcome.transitioned is False
        assert outcome.retry is None
        assert mixed_queue.get_queue() == before

    @pytest.mark.parametrize("result", ["failed", "Failed", "FAILED"])
    def test_conclude_failed_any_case(self, job_queue: JobQueue, result: str):
        """Test the FAILED result is recognized regardless of letter case."""
        job_queue.enqueue(JobType.TIME_CRITICAL)
        job_queue.dequeue()

        outcome = job_queue.conclude(1, result)

        assert outcome.result == JobResult.FAILED
        assert outcome.retry.id == 2
        assert job_queue.get_job(2).status == JobStatus.QUEUED

    @pytest.mark.parametrize("result", ["MAYBE", "", "SUCCEEDED", None])
    def test_conclude_invalid_result(self, mixed_queue: JobQueue, result):
        """Test an unknown result is rejected before the job is touched."""
        job = mixed_queue.dequeue()
        before = mixed_queue.get_queue()

        with pytest.raises(InvalidJobResult) as exc_info:
            mixed_queue.conclude(job.id, result)

        assert exc_info.value.code == "invalid_job_result"
        assert mixed_queue.get_queue() == before

    def test_conclude_invalid_result_checked_before_lookup(self, job_queue: JobQueue):
        """Test an unknown result is reported even for an unknown id."""
        with pytest.raises(InvalidJobResult):
            job_queue.conclude(99, "MAYBE")


class TestInspection:
    """Tests for get_job and get_queue."""

    def test_get_job_not_found(self, job_queue: JobQueue):
        """Test getting an unknown job."""
        with pytest.raises(JobNotFound) as exc_info:
            job_queue.get_job(7)

        assert exc_info.value.job_id == 7
        assert exc_info.value.code == "job_not_found"

    def test_get_queue_empty(self, job_queue: JobQueue):
        """Test the snapshot of an empty queue."""
        assert job_queue.get_queue() == {}

    def test_get_queue_is_snapshot(self, mixed_queue: JobQueue):
        """Test the snapshot is detached from queue state."""
        snapshot = mixed_queue.get_queue()
        snapshot[1].status = JobStatus.CONCLUDED
        del snapshot[2]

        assert mixed_queue.get_job(1).status == JobStatus.QUEUED
        assert 2 in mixed_queue.get_queue()
        assert mixed_queue.dequeue().id == 2


class TestScenarios:
    """End to end sequences against the queue."""

    def test_critical_preferred_then_empty(self, job_queue: JobQueue):
        """Test critical preference followed by an empty queue."""
        assert job_queue.enqueue(JobType.NOT_TIME_CRITICAL) == 1
        assert job_queue.enqueue(JobType.TIME_CRITICAL) == 2

        job = job_queue.dequeue()
        assert (job.id, job.status) == (2, JobStatus.IN_PROGRESS)

        job = job_queue.dequeue()
        assert (job.id, job.status) == (1, JobStatus.IN_PROGRESS)

        with pytest.raises(NoJobsAvailable):
            job_queue.dequeue()

    def test_failed_job_is_retried(self, job_queue: JobQueue):
        """Test a failed job comes back under a new id."""
        assert job_queue.enqueue(JobType.TIME_CRITICAL) == 1
        assert job_queue.dequeue().id == 1

        job_queue.conclude(1, JobResult.FAILED)

        assert job_queue.get_job(1).status == JobStatus.CONCLUDED
        retry = job_queue.get_job(2)
        assert retry.status == JobStatus.QUEUED
        assert retry.type == JobType.TIME_CRITICAL

        job = job_queue.dequeue()
        assert job.id == 2
        assert job.status == JobStatus.IN_PROGRESS
