import asyncio
import logging
from enum import Enum

from simple_cron.domain.job import Job, JobState
from simple_cron.events import (
    EventBus,
    EventName,
    JobFailedEvent,
    JobMaxRetriesReachedEvent,
    JobRetriedEvent,
)
from simple_cron.exceptions import TaskExecutionError
from simple_cron.executors.protocol import invoke_task
from simple_cron.storages.protocol import JobRegistry

logger = logging.getLogger(__name__)


class ExecutionOutcome(str, Enum):
    SUCCEEDED = "succeeded"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"
    ABANDONED = "abandoned"


class RetryingExecutor:
    """
    Runs a single attempt of a job and applies the retry policy to its outcome.

    The executor owns the job's failure counter and state transitions and
    publishes the matching lifecycle events. It never removes jobs or waits
    out retry delays; the caller acts on the returned outcome.
    """

    def __init__(self, registry: JobRegistry, events: EventBus):
        self.registry = registry
        self.events = events

    async def execute(self, job_id: str) -> ExecutionOutcome:
        job = self.registry.get(job_id)
        if job is None:
            logger.debug("Job %s is no longer registered, abandoning attempt", job_id)
            return ExecutionOutcome.ABANDONED

        job.set_state(JobState.RUNNING)
        self.events.publish(EventName.JOB_STARTED, job_id)

        try:
            await invoke_task(job.task)
        except asyncio.CancelledError:
            job.set_state(JobState.IDLE)
            raise
        except Exception as e:
            return self._handle_failure(job, e)

        self.events.publish(EventName.JOB_FINISHED, job_id)
        job.record_success()
        return ExecutionOutcome.SUCCEEDED

    def _handle_failure(self, job: Job, cause: Exception) -> ExecutionOutcome:
        attempt = job.record_failure()
        error = TaskExecutionError(job.id, attempt, f"Task for job {job.id} failed on attempt {attempt}: {cause!r}")
        error.__cause__ = cause

        logger.warning("Job %s failed on attempt %d: %r", job.id, attempt, cause)
        self.events.publish(EventName.JOB_FAILED, JobFailedEvent(job_id=job.id, error=error, attempt=attempt))

        if not job.retries_exhausted:
            if self.registry.get(job.id) is None:
                logger.debug("Job %s was stopped during its attempt, not retrying", job.id)
                return ExecutionOutcome.ABANDONED
            job.set_state(JobState.RETRYING)
            self.events.publish(EventName.JOB_RETRIED, JobRetriedEvent(job_id=job.id, attempt=attempt))
            return ExecutionOutcome.RETRYING

        job.set_state(JobState.EXHAUSTED)
        logger.warning("Job %s exhausted its %d retries", job.id, job.max_retries)
        self.events.publish(EventName.JOB_MAX_RETRIES_REACHED, JobMaxRetriesReachedEvent(job_id=job.id, error=error))
        return ExecutionOutcome.EXHAUSTED
