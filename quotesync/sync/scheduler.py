# quotesync Sync Scheduler
# Timer-driven and manual triggering of the same sync cycle

import asyncio
import logging
from enum import Enum

from quotesync.sync.engine import SyncEngine, SyncResult

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL_MS = 30_000


class SchedulerState(str, Enum):
    """Scheduler state."""

    IDLE = "idle"
    RUNNING = "running"


class SyncScheduler:
    """
    Drives the sync engine from two producers.

    A recurring timer runs background cycles (status reported on failure
    only); ``trigger`` and ``request_sync`` run manual cycles that report.
    Both go through the engine's single-flight guard. Cycles are never
    cancelled; ``stop`` waits for in-flight ones to finish.
    """

    def __init__(self, engine: SyncEngine, interval_ms: int = DEFAULT_POLL_INTERVAL_MS):
        """
        Initialize scheduler.

        Args:
            engine: Sync engine to drive.
            interval_ms: Polling interval in milliseconds.
        """
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        self.engine = engine
        self.interval_ms = interval_ms
        self._timer: asyncio.Task | None = None
        self._stop: asyncio.Event | None = None
        self._pending: set[asyncio.Task] = set()

    @property
    def interval(self) -> float:
        """Polling interval in seconds."""
        return self.interval_ms / 1000

    @property
    def state(self) -> SchedulerState:
        """Current scheduler state."""
        return SchedulerState.RUNNING if self.engine.is_syncing else SchedulerState.IDLE

    @property
    def is_started(self) -> bool:
        """Check if the timer is active."""
        return self._timer is not None and not self._timer.done()

    def start(self, *, run_immediately: bool = True) -> None:
        """
        Start the recurring timer.

        Must be called from a running event loop.

        Args:
            run_immediately: Also run one manual (reporting) cycle right away.
        """
        if self.is_started:
            return

        self._stop = asyncio.Event()
        self._timer = asyncio.create_task(self._poll(self._stop))
        if run_immediately:
            self.request_sync()

    async def trigger(self) -> SyncResult:
        """Run a manual cycle and wait for its result."""
        return await self.engine.sync(report=True)

    def request_sync(self) -> asyncio.Task:
        """Schedule a manual cycle without waiting for it."""
        task = asyncio.create_task(self.trigger())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def wait(self) -> None:
        """Wait until the timer is stopped."""
        if self._timer is not None:
            await self._timer

    async def stop(self) -> None:
        """Stop the timer and wait for in-flight cycles."""
        if self._stop is not None:
            self._stop.set()
        if self._timer is not None:
            await self._timer
            self._timer = None
        if self._pending:
            await asyncio.gather(*self._pending)

    async def _poll(self, stop: asyncio.Event) -> None:
        while not stop.is_set():
            try:
                await asyncio.wait_for(stop.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                result = await self.engine.sync(report=False)
                logger.debug("Background sync: %s", result.status.value)

    async def __aenter__(self) -> "SyncScheduler":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()
