"""Cooperative cancellation for scripted sequences."""

from __future__ import annotations

import asyncio


class CancellationToken:
    """Signals that the current skill session has been cancelled.

    Every pause in a scripted sequence goes through :meth:`wait`, which
    doubles as a checkpoint: it returns ``False`` as soon as the token is
    cancelled so the caller can abandon the rest of the sequence.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    async def wait(self, seconds: float) -> bool:
        """Pause for ``seconds`` unless cancelled first.

        Returns:
            True if the full pause elapsed, False if cancelled.
        """
        if self.cancelled:
            return False
        if seconds <= 0:
            await asyncio.sleep(0)
            return not self.cancelled
        try:
            await asyncio.wait_for(self._event.wait(), timeout=seconds)
        except asyncio.TimeoutError:
            return True
        return False
