"""Recurring auto-pay sweep scheduler."""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from src.application.dto import SweepResult

logger = structlog.get_logger(__name__)

SweepCallable = Callable[[], Awaitable[SweepResult]]


class AutoRepayScheduler:
    """
    Runs the auto-pay sweep on a fixed interval.

    The scheduler owns one asyncio task. start() and stop() are driven by
    the application lifespan; run_once() runs a sweep right away and is
    what tests and the admin endpoint use.
    """

    def __init__(self, sweep: SweepCallable, interval_seconds: float):
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._sweep = sweep
        self._interval = interval_seconds
        self._task: Optional[asyncio.Task] = None
        self._runs = 0

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def runs(self) -> int:
        """Number of sweeps completed by this scheduler."""
        return self._runs

    def start(self) -> None:
        """Start the recurring task; a second call while running is a no-op."""
        if self.is_running:
            return
        self._task = asyncio.create_task(self._run_forever(), name="autopay-sweep")
        logger.info("autopay_scheduler_started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Cancel the recurring task and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("autopay_scheduler_stopped", runs=self._runs)

    async def run_once(self) -> SweepResult:
        """Run one sweep now and return its result."""
        result = await self._sweep()
        self._runs += 1
        return result

    async def _run_forever(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                await self.run_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                # The next tick retries; nothing to surface to a caller
                logger.exception(
                    "autopay_sweep_failed",
                    error=str(e),
                    error_type=type(e).__name__,
                )
