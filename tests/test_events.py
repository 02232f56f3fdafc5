import logging
from typing import List

import pytest

from simple_cron.events import EventBus, EventName, JobRetriedEvent


def test_publish_delivers_payload_to_all_listeners_in_order(bus: EventBus) -> None:
    received: List[str] = []
    bus.subscribe(EventName.JOB_STARTED, lambda job_id: received.append(f"a:{job_id}"))
    bus.subscribe("job_started", lambda job_id: received.append(f"b:{job_id}"))

    bus.publish(EventName.JOB_STARTED, "job_1")

    assert received == ["a:job_1", "b:job_1"]


def test_events_without_payload_call_listeners_without_arguments(bus: EventBus) -> None:
    calls: List[str] = []
    bus.subscribe(EventName.SCHEDULER_STARTED, lambda: calls.append("started"))

    bus.publish(EventName.SCHEDULER_STARTED)

    assert calls == ["started"]


def test_structured_payload(bus: EventBus) -> None:
    received: List[JobRetriedEvent] = []
    bus.subscribe(EventName.JOB_RETRIED, received.append)

    bus.publish(EventName.JOB_RETRIED, JobRetriedEvent(job_id="job_1", attempt=2))

    assert received[0].job_id == "job_1"
    assert received[0].attempt == 2


def test_unsubscribe(bus: EventBus) -> None:
    calls: List[str] = []
    listener = calls.append
    unsubscribe = bus.subscribe(EventName.JOB_STOPPED, listener)
    assert bus.listener_count(EventName.JOB_STOPPED) == 1

    assert unsubscribe() is True
    assert bus.unsubscribe(EventName.JOB_STOPPED, listener) is False
    bus.publish(EventName.JOB_STOPPED, "job_1")

    assert calls == []
    assert bus.listener_count(EventName.JOB_STOPPED) == 0


def test_unknown_event_name_is_rejected(bus: EventBus) -> None:
    with pytest.raises(ValueError):
        bus.subscribe("job_exploded", lambda: None)


def test_late_subscribers_do_not_receive_past_events(bus: EventBus) -> None:
    bus.publish(EventName.JOB_FINISHED, "job_1")
    calls: List[str] = []
    bus.subscribe(EventName.JOB_FINISHED, calls.append)
    assert calls == []


def test_failing_listener_does_not_block_others(bus: EventBus, caplog: pytest.LogCaptureFixture) -> None:
    calls: List[str] = []

    def broken(job_id: str) -> None:
        raise RuntimeError("listener bug")

    bus.subscribe(EventName.JOB_SCHEDULED, broken)
    bus.subscribe(EventName.JOB_SCHEDULED, calls.append)

    with caplog.at_level(logging.ERROR, logger="simple_cron.events"):
        bus.publish(EventName.JOB_SCHEDULED, "job_1")

    assert calls == ["job_1"]
    assert "listener" in caplog.text.lower()


def test_publish_accepts_plain_event_names(bus: EventBus, caplog: pytest.LogCaptureFixture) -> None:
    calls: List[str] = []

    def broken() -> None:
        raise RuntimeError("listener bug")

    bus.subscribe(EventName.SCHEDULER_STOPPED, broken)
    bus.subscribe(EventName.SCHEDULER_STOPPED, lambda: calls.append("stopped"))

    with caplog.at_level(logging.ERROR, logger="simple_cron.events"):
        bus.publish("scheduler_stopped")

    assert calls == ["stopped"]
    assert "scheduler_stopped" in caplog.text


def test_publish_rejects_unknown_event_name(bus: EventBus) -> None:
    with pytest.raises(ValueError):
        bus.publish("job_exploded")
