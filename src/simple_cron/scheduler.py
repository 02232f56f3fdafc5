import asyncio
import logging
from datetime import datetime
from functools import partial
from typing import Callable, Dict, List, Optional, Union

from simple_cron.config import SchedulerSettings, get_settings
from simple_cron.domain.job import Job, JobOptions, JobState
from simple_cron.domain.schedule import ScheduleExpression
from simple_cron.events import EventBus, EventName, Listener
from simple_cron.executors.protocol import TaskCallable
from simple_cron.executors.retry import ExecutionOutcome, RetryingExecutor
from simple_cron.polling import PollingLoop
from simple_cron.storages.memory import InMemoryJobRegistry
from simple_cron.storages.protocol import JobRegistry

logger = logging.getLogger(__name__)


class CronScheduler:
    """
    In-process cron scheduler running on the current asyncio event loop.

    The polling loop starts with the first scheduled job and stops by itself as
    soon as no job is registered. Control methods are synchronous and must be
    called from the event loop's thread.
    """

    def __init__(
        self,
        settings: Optional[SchedulerSettings] = None,
        clock: Optional[Callable[[], datetime]] = None,
        registry: Optional[JobRegistry] = None,
        events: Optional[EventBus] = None,
    ):
        self.settings: SchedulerSettings = settings or get_settings()
        self.clock: Callable[[], datetime] = clock or datetime.now
        self.registry: JobRegistry = registry if registry is not None else InMemoryJobRegistry()
        self.events: EventBus = events if events is not None else EventBus()
        self.executor = RetryingExecutor(self.registry, self.events)
        self._polling = PollingLoop(self.settings.tick_interval, self._tick)
        self._chains: Dict[str, asyncio.Task] = {}

    @property
    def is_running(self) -> bool:
        return self._polling.is_running

    def on(self, event: Union[EventName, str], listener: Listener) -> Callable[[], bool]:
        return self.events.subscribe(event, listener)

    def off(self, event: Union[EventName, str], listener: Listener) -> bool:
        return self.events.unsubscribe(event, listener)

    def schedule(
        self,
        expression: str,
        task: TaskCallable,
        once: bool = False,
        max_retries: Optional[int] = None,
        retry_delay: Optional[int] = None,
    ) -> str:
        """
        Register a task to run whenever the six-field expression matches.

        Args:
            expression (str): "second minute hour day month weekday".
            task (Callable): Zero-argument callable or coroutine function.
            once (bool): Remove the job after its first successful run.
            max_retries (int): Retries after a failure; defaults to the settings value.
            retry_delay (int): Milliseconds between retries; defaults to the settings value.

        Returns:
            str: The new job ID.

        Raises:
            InvalidExpressionFormat: If the expression does not have six fields.
            InvalidFieldSyntax: If strict field checking is enabled and a field is malformed.
            pydantic.ValidationError: If the options are out of range.
            RuntimeError: If called without a running event loop.
        """
        asyncio.get_running_loop()
        schedule = ScheduleExpression.parse(expression, strict=self.settings.strict_fields)
        options = JobOptions(
            once=once,
            max_retries=self.settings.default_max_retries if max_retries is None else max_retries,
            retry_delay=self.settings.default_retry_delay if retry_delay is None else retry_delay,
        )

        job_id = self.registry.add(schedule, task, options)
        logger.info("Scheduled job %s with expression '%s'", job_id, schedule)
        self._start_polling()
        self.events.publish(EventName.JOB_SCHEDULED, job_id)
        return job_id

    def stop(self, job_id: str) -> bool:
        """
        Unregister a job and cancel its pending retry. A running attempt is not
        interrupted. Returns False if the job was not registered.
        """
        job = self.registry.get(job_id)
        if job is None:
            return False
        self.registry.remove(job_id)

        self._cancel_pending_retry(job)
        logger.info("Stopped job %s", job_id)
        self.events.publish(EventName.JOB_STOPPED, job_id)
        self._stop_polling_if_idle()
        return True

    def stop_all(self) -> None:
        jobs = [self.registry.get(job_id) for job_id in self.registry.list_ids()]
        self.registry.clear()
        for job in jobs:
            if job is not None:
                self._cancel_pending_retry(job)

        self._stop_polling_if_idle()
        logger.info("Stopped all jobs")
        self.events.publish(EventName.ALL_JOBS_STOPPED)

    def list_jobs(self) -> List[str]:
        return self.registry.list_ids()

    def get_job(self, job_id: str) -> Optional[Job]:
        return self.registry.get(job_id)

    async def shutdown(self) -> None:
        """
        Stop every job and wait for in-flight executions to finish.
        """
        self.stop_all()
        chains = list(self._chains.values())
        if chains:
            await asyncio.gather(*chains, return_exceptions=True)
        await self._polling.join()

    def _start_polling(self) -> None:
        if self._polling.start():
            logger.info("Scheduler started, ticking every %ss", self._polling.interval)
            self.events.publish(EventName.SCHEDULER_STARTED)

    def _stop_polling_if_idle(self) -> None:
        if self.registry.is_empty() and self._polling.stop():
            logger.info("Scheduler stopped, no jobs left")
            self.events.publish(EventName.SCHEDULER_STOPPED)

    def _tick(self) -> None:
        now = self.clock()
        for job_id in self.registry.list_ids():
            job = self.registry.get(job_id)
            if job is None or not job.schedule.is_due(now):
                continue
            if self._is_in_flight(job_id):
                logger.debug("Job %s is due but its previous execution is still in flight", job_id)
                continue
            logger.debug("Job %s is due at %s", job_id, now.isoformat())
            self._dispatch(job_id)

        self._stop_polling_if_idle()

    def _is_in_flight(self, job_id: str) -> bool:
        chain = self._chains.get(job_id)
        return chain is not None and not chain.done()

    def _dispatch(self, job_id: str) -> None:
        chain = asyncio.create_task(self._run_chain(job_id))
        self._chains[job_id] = chain
        chain.add_done_callback(partial(self._forget_chain, job_id))

    def _forget_chain(self, job_id: str, chain: asyncio.Task) -> None:
        if self._chains.get(job_id) is chain:
            del self._chains[job_id]
        if not chain.cancelled() and chain.exception() is not None:
            logger.error("Execution of job %s crashed", job_id, exc_info=chain.exception())

    def _cancel_pending_retry(self, job: Job) -> None:
        chain = self._chains.get(job.id)
        if chain is not None and job.state == JobState.RETRYING:
            logger.debug("Cancelling pending retry of job %s", job.id)
            chain.cancel()

    async def _run_chain(self, job_id: str) -> None:
        """
        Run one triggered execution, following retries until it settles.
        Retry delays are driven by time, not by the cron expression.
        """
        while True:
            outcome = await self.executor.execute(job_id)

            if outcome is ExecutionOutcome.SUCCEEDED:
                job = self.registry.get(job_id)
                if job is not None and job.once:
                    self.stop(job_id)
                return

            if outcome is ExecutionOutcome.EXHAUSTED:
                self.stop(job_id)
                return

            if outcome is ExecutionOutcome.ABANDONED:
                return

            job = self.registry.get(job_id)
            if job is None:
                return
            await asyncio.sleep(job.retry_delay_seconds)
