"""Periodic timers driving the skill's callbacks."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

from joke_skill.utils.logging import get_logger

log = get_logger(__name__)


class PeriodicTimer:
    """Calls an async callback after an initial delay, then every period.

    A tick is awaited before the next one is scheduled, so a slow tick
    delays the following one instead of overlapping it. Stopping never
    interrupts a tick that is already running unless it outlives the
    grace period.

    Example usage:
        timer = PeriodicTimer("led", change_led, initial_delay=1.0, period=1.0)
        timer.start()
        ...
        await timer.stop()
    """

    def __init__(
        self,
        name: str,
        callback: Callable[[], Awaitable[None]],
        initial_delay: float,
        period: float,
    ) -> None:
        if period <= 0:
            raise ValueError(f"Timer period must be positive, got {period}")
        self.name = name
        self.initial_delay = initial_delay
        self.period = period
        self.ticks = 0
        self._callback = callback
        self._stopping = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. Safe to call on a running timer."""
        if self.running:
            log.debug("Timer already running", timer=self.name)
            return
        self._stopping = asyncio.Event()
        self._task = asyncio.create_task(self._run(), name=f"timer:{self.name}")

    async def stop(self, grace_seconds: float = 5.0) -> None:
        """Stop ticking.

        Waits for an in-flight tick to return, cancelling it only if it
        is still running after ``grace_seconds``.
        """
        if self._task is None:
            return
        task, self._task = self._task, None
        self._stopping.set()
        if task is asyncio.current_task():
            return
        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=grace_seconds)
        except asyncio.TimeoutError:
            log.warning("Timer tick outlived grace period", timer=self.name)
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        log.debug("Timer stopped", timer=self.name, ticks=self.ticks)

    async def _pause(self, seconds: float) -> bool:
        """Sleep between ticks; False once the timer is stopping."""
        if self._stopping.is_set():
            return False
        try:
            await asyncio.wait_for(self._stopping.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return True
        return False

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        if not await self._pause(self.initial_delay):
            return
        while True:
            started = loop.time()
            try:
                await self._callback()
            except Exception:
                log.exception("timer_callback_failed", timer=self.name)
            self.ticks += 1
            elapsed = loop.time() - started
            if not await self._pause(max(0.0, self.period - elapsed)):
                return
