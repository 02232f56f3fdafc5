"""
In-process Cron Scheduler

Core Concepts:

ScheduleExpression:
    A six-field cron expression (second minute hour day month weekday).
    Fields are matched lazily against the current time: wildcard, list,
    range, step and literal syntax are supported.

Job:
    A registered task together with its schedule, retry policy and runtime
    state (failure count). Jobs live in memory only.

CronScheduler:
    Owns the job registry, a polling loop that evaluates every job once per
    tick, and the retry state machine that runs due jobs. Lifecycle events
    are published through an EventBus.

Relationships:
    - A Job may run many times; each triggered execution retries on failure
      until it succeeds or exhausts its retry budget.
"""

from .domain import Job, JobOptions, JobState, ScheduleExpression, parse_expression
from .events import EventBus, EventName, JobFailedEvent, JobMaxRetriesReachedEvent, JobRetriedEvent
from .exceptions import CronError, InvalidExpressionFormat, InvalidFieldSyntax, TaskExecutionError
from .scheduler import CronScheduler

__all__ = [
    "CronScheduler",
    "ScheduleExpression",
    "parse_expression",
    "Job",
    "JobOptions",
    "JobState",
    "EventBus",
    "EventName",
    "JobFailedEvent",
    "JobRetriedEvent",
    "JobMaxRetriesReachedEvent",
    "CronError",
    "InvalidExpressionFormat",
    "InvalidFieldSyntax",
    "TaskExecutionError",
]
