from typing import Any, Callable, Dict, Iterator, List, Optional

from simple_cron.domain.job import Job, JobOptions
from simple_cron.domain.schedule import ScheduleExpression
from simple_cron.storages.protocol import JobRegistry


class InMemoryJobRegistry(JobRegistry):
    """
    Memory-resident job registry. Jobs are lost when the process exits.

    Iteration follows insertion order. The registry is not thread-safe; the
    scheduler mutates it only from its event loop.
    """

    def __init__(self):
        self._jobs: Dict[str, Job] = {}

    def add(self, schedule: ScheduleExpression, task: Callable[[], Any], options: JobOptions) -> str:
        job = Job.from_options(schedule, task, options)
        self._jobs[job.id] = job
        return job.id

    def remove(self, job_id: str) -> bool:
        return self._jobs.pop(job_id, None) is not None

    def get(self, job_id: str) -> Optional[Job]:
        return self._jobs.get(job_id)

    def list_ids(self) -> List[str]:
        return list(self._jobs)

    def is_empty(self) -> bool:
        return not self._jobs

    def clear(self) -> None:
        self._jobs.clear()

    def __len__(self) -> int:
        return len(self._jobs)

    def __contains__(self, job_id: object) -> bool:
        return job_id in self._jobs

    def __iter__(self) -> Iterator[Job]:
        return iter(list(self._jobs.values()))
