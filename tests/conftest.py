import asyncio
from datetime import datetime
from typing import Any, List, Optional, Tuple

import pytest

from simple_cron.config import SchedulerSettings
from simple_cron.events import EventBus, EventName


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class EventRecorder:
    """
    Subscribes to every event and records (name, payload) pairs in order.
    """

    def __init__(self, bus: EventBus):
        self.events: List[Tuple[EventName, Optional[Any]]] = []
        for name in EventName:
            bus.subscribe(name, self._make_listener(name))

    def _make_listener(self, name: EventName):
        def listener(*args):
            self.events.append((name, args[0] if args else None))
        return listener

    def names(self) -> List[EventName]:
        return [name for name, _ in self.events]

    def payloads(self, name: EventName) -> List[Any]:
        return [payload for event_name, payload in self.events if event_name == name]

    def count(self, name: EventName) -> int:
        return len(self.payloads(name))

    async def wait_for(self, name: EventName, count: int = 1, timeout: float = 2.0) -> None:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while self.count(name) < count:
            if loop.time() > deadline:
                raise AssertionError(f"Timed out waiting for {count} x {name.value}; got {self.names()}")
            await asyncio.sleep(0.005)


@pytest.fixture(scope="function")
def clock() -> FakeClock:
    # Sunday 2024-01-07 10:30:15
    return FakeClock(datetime(2024, 1, 7, 10, 30, 15))


@pytest.fixture(scope="function")
def settings() -> SchedulerSettings:
    return SchedulerSettings(tick_interval=0.01, default_max_retries=3, default_retry_delay=0)


@pytest.fixture(scope="function")
def bus() -> EventBus:
    return EventBus()


@pytest.fixture(scope="function")
def recorder(bus: EventBus) -> EventRecorder:
    return EventRecorder(bus)
