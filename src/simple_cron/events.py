"""
In-process publish/subscribe channel for scheduler lifecycle events.

Delivery is synchronous: `publish` calls every listener subscribed at that
moment, in subscription order, before returning. A listener that raises is
logged and skipped so it cannot disturb scheduling or other listeners.
"""

import logging
from collections import defaultdict
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

Listener = Callable[..., Any]


class EventName(str, Enum):
    SCHEDULER_STARTED = "scheduler_started"
    SCHEDULER_STOPPED = "scheduler_stopped"
    JOB_SCHEDULED = "job_scheduled"
    JOB_STOPPED = "job_stopped"
    ALL_JOBS_STOPPED = "all_jobs_stopped"
    JOB_STARTED = "job_started"
    JOB_FINISHED = "job_finished"
    JOB_FAILED = "job_failed"
    JOB_RETRIED = "job_retried"
    JOB_MAX_RETRIES_REACHED = "job_max_retries_reached"


class JobFailedEvent(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    job_id: str
    error: BaseException
    attempt: int = Field(..., description="Failure count after this attempt")


class JobRetriedEvent(BaseModel):
    model_config = ConfigDict(frozen=True)

    job_id: str
    attempt: int


class JobMaxRetriesReachedEvent(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    job_id: str
    error: BaseException


class EventBus:
    """
    Registry of listener callables keyed by event name.
    """

    def __init__(self):
        self._listeners: Dict[EventName, List[Listener]] = defaultdict(list)

    def subscribe(self, event: Union[EventName, str], listener: Listener) -> Callable[[], bool]:
        """
        Register a listener and return a callable that unsubscribes it.

        Raises:
            ValueError: If the event name is unknown.
        """
        name = EventName(event)
        self._listeners[name].append(listener)
        return lambda: self.unsubscribe(name, listener)

    def unsubscribe(self, event: Union[EventName, str], listener: Listener) -> bool:
        name = EventName(event)
        listeners = self._listeners.get(name)
        if not listeners or listener not in listeners:
            return False
        listeners.remove(listener)
        if not listeners:
            del self._listeners[name]
        return True

    def listener_count(self, event: Union[EventName, str]) -> int:
        return len(self._listeners.get(EventName(event), ()))

    def publish(self, event: Union[EventName, str], payload: Optional[Any] = None) -> None:
        """
        Deliver an event to the current subscribers. Events without a payload
        call listeners with no arguments.
        """
        name = EventName(event)
        args = () if payload is None else (payload,)
        for listener in list(self._listeners.get(name, ())):
            try:
                listener(*args)
            except Exception:
                logger.exception("Listener %r failed while handling %s", listener, name.value)
