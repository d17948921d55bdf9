"""Tracking of audio playback completion."""

from __future__ import annotations

import asyncio
from collections import Counter

from joke_skill.utils.logging import get_logger

log = get_logger(__name__)


class AudioCompletionTracker:
    """Last-completed-audio marker with notification.

    The audio-completion callback records each finished clip here; the
    joke sequence waits on it with a timeout instead of polling.

    A wait is armed before the clip is played. Arming snapshots how many
    times the clip already finished, so an earlier playback of the same
    clip (the fallback clip in particular) never satisfies a new wait.
    """

    def __init__(self, lock: asyncio.Lock | None = None) -> None:
        self._condition = asyncio.Condition(lock)
        self._completed: Counter[str] = Counter()
        self.last_completed: str | None = None

    async def record(self, name: str) -> None:
        """Record that ``name`` finished playing and wake waiters."""
        async with self._condition:
            self.last_completed = name
            self._completed[name] += 1
            self._condition.notify_all()

    def arm(self, name: str) -> int:
        """Snapshot the completion count of ``name`` before playing it."""
        return self._completed[name]

    async def wait_for(self, name: str, armed: int, timeout: float) -> bool:
        """Wait until ``name`` completes again after being armed.

        Args:
            name: Clip to wait for.
            armed: Value returned by :meth:`arm` before the clip started.
            timeout: Maximum wait in seconds.

        Returns:
            True if the clip completed, False on timeout.
        """
        async with self._condition:
            try:
                await asyncio.wait_for(
                    self._condition.wait_for(lambda: self._completed[name] > armed),
                    timeout=timeout,
                )
            except asyncio.TimeoutError:
                log.debug("audio_wait_timed_out", clip=name, timeout=timeout)
                return False
        return True
