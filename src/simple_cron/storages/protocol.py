from typing import Any, Callable, List, Optional, Protocol

from simple_cron.domain.job import Job, JobOptions
from simple_cron.domain.schedule import ScheduleExpression


class JobRegistry(Protocol):
    def add(self, schedule: ScheduleExpression, task: Callable[[], Any], options: JobOptions) -> str:
        """Register a new job with zero failures and return its ID."""
        ...

    def remove(self, job_id: str) -> bool:
        """Remove a job by its ID. Return True if it was present, False otherwise."""
        ...

    def get(self, job_id: str) -> Optional[Job]:
        """Retrieve a job by its ID."""
        ...

    def list_ids(self) -> List[str]:
        """Snapshot of the registered job IDs."""
        ...

    def is_empty(self) -> bool:
        """Whether no job is registered."""
        ...

    def clear(self) -> None:
        """Remove every job."""
        ...
