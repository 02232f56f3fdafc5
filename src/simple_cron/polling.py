import asyncio
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class PollingLoop:
    """
    Periodic tick driver backed by a single asyncio task.

    The first tick fires one interval after `start`. The tick callback is
    synchronous; anything slow must be dispatched as its own task.
    """

    def __init__(self, interval: float, on_tick: Callable[[], None]):
        if interval <= 0:
            raise ValueError("Tick interval must be positive")
        self.interval: float = interval
        self._on_tick = on_tick
        self._task: Optional[asyncio.Task] = None
        self._stopping: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """
        Start ticking. Returns False if the loop was already running.
        """
        if self.is_running:
            return False
        self._task = asyncio.create_task(self._run())
        return True

    def stop(self) -> bool:
        """
        Stop ticking. Safe to call from inside a tick. Returns False if not running.
        """
        if self._task is None:
            return False
        self._stopping, self._task = self._task, None
        self._stopping.cancel()
        return True

    async def join(self) -> None:
        """
        Wait until a stopped loop has fully wound down.
        """
        task = self._stopping
        if task is not None and task is not asyncio.current_task():
            await asyncio.gather(task, return_exceptions=True)

    async def _run(self):
        loop = asyncio.get_running_loop()
        deadline = loop.time()
        try:
            while True:
                # Ticks are anchored to fixed deadlines; a stalled loop resumes from now.
                deadline = max(deadline + self.interval, loop.time())
                await asyncio.sleep(max(0.0, deadline - loop.time()))
                try:
                    self._on_tick()
                except Exception:
                    logger.exception("Error in scheduler tick")
        except asyncio.CancelledError:
            pass
