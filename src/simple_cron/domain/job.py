import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from .schedule import ScheduleExpression


class JobState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    RETRYING = "retrying"
    EXHAUSTED = "exhausted"


class JobOptions(BaseModel):
    """
    Per-job execution options.
    """
    once: bool = Field(default=False, description="Remove the job after its first successful run")
    max_retries: int = Field(default=3, ge=0, description="Retries allowed after the first failure")
    retry_delay: int = Field(default=5000, ge=0, description="Delay before a retry, in milliseconds")


def new_job_id() -> str:
    return f"job_{uuid.uuid4().hex}"


class Job(BaseModel):
    """
    A registered task together with its schedule and runtime state.
    """
    id: str = Field(default_factory=new_job_id, description="Unique job identifier")
    schedule: ScheduleExpression = Field(..., description="When the job is due")
    task: Callable[[], Any] = Field(..., description="Zero-argument callable, sync or async")
    once: bool = False
    max_retries: int = Field(default=3, ge=0)
    retry_delay: int = Field(default=5000, ge=0)
    failures: int = 0
    state: JobState = JobState.IDLE
    created_at: datetime = Field(default_factory=datetime.now)
    last_run_at: Optional[datetime] = None

    @classmethod
    def from_options(cls, schedule: ScheduleExpression, task: Callable[[], Any], options: JobOptions) -> "Job":
        return cls(schedule=schedule, task=task, **options.model_dump())

    @property
    def retry_delay_seconds(self) -> float:
        return self.retry_delay / 1000

    @property
    def retries_exhausted(self) -> bool:
        return self.failures > self.max_retries

    def set_state(self, state: JobState) -> None:
        """
        Update the runtime state of the job.
        """
        self.state = state
        if state == JobState.RUNNING:
            self.last_run_at = datetime.now()

    def record_success(self) -> None:
        self.failures = 0
        self.set_state(JobState.IDLE)

    def record_failure(self) -> int:
        self.failures += 1
        return self.failures
