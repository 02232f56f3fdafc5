import asyncio
import logging
import random

from simple_cron import CronScheduler, EventName, JobFailedEvent

logging.basicConfig(level=logging.INFO)

scheduler = CronScheduler()


async def flaky_report():
    if random.random() < 0.5:
        raise RuntimeError("upstream unavailable")
    print("Report generated")


def heartbeat():
    print("Heartbeat")


def on_failed(event: JobFailedEvent):
    print(f"Job {event.job_id} failed (attempt {event.attempt}): {event.error.__cause__}")


async def main():
    scheduler.on(EventName.JOB_FAILED, on_failed)
    scheduler.on(EventName.SCHEDULER_STOPPED, lambda: print("Scheduler idle, stopped"))

    scheduler.schedule("* * * * * *", heartbeat)
    scheduler.schedule("*/5 * * * * *", flaky_report, max_retries=2, retry_delay=1000)
    scheduler.schedule("* * * * * *", lambda: print("Runs once"), once=True)

    await asyncio.sleep(15)
    await scheduler.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
