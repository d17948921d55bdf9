"""Skill runner: plays the host's part for one skill run.

The robot runtime normally loads the skill, starts it, cancels it when
asked and times it out after the skill's timeout. The runner does the
same on a plain event loop so the skill can run against the mock robot
or be exercised end to end in tests.
"""

from __future__ import annotations

import asyncio
import time
from collections.abc import AsyncGenerator, Awaitable
from contextlib import asynccontextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar
from uuid import uuid4

from joke_skill.behaviors.coordinator import TellingJokeSkill
from joke_skill.errors import ErrorResponse
from joke_skill.utils.logging import bind_context, clear_context, get_logger

log = get_logger(__name__)

T = TypeVar("T")


class RunOutcome(str, Enum):
    """How a run ended."""

    CANCELLED = "cancelled"  # stop requested
    TIMED_OUT = "timed_out"  # skill timeout elapsed


@dataclass
class RunResult:
    """Summary of a finished run."""

    session_id: str
    outcome: RunOutcome
    started: bool
    duration_seconds: float
    last_error: ErrorResponse | None = None


class SkillRunner:
    """Drives one :class:`TellingJokeSkill` through its lifecycle.

    Lifecycle calls are serialized: a cancel requested while the skill is
    still starting waits for the start to return.

    Example usage:
        runner = SkillRunner(TellingJokeSkill(MockRobot(), config))
        result = await runner.run()
    """

    def __init__(
        self,
        skill: TellingJokeSkill,
        timeout_seconds: float | None = None,
    ) -> None:
        """Initialize the runner.

        Args:
            skill: The skill to run.
            timeout_seconds: Overrides the skill's own timeout.
        """
        self.skill = skill
        if timeout_seconds is None:
            timeout_seconds = skill.descriptor.timeout_seconds
        self.timeout_seconds = timeout_seconds
        self._lifecycle_lock = asyncio.Lock()
        self._stop_requested = asyncio.Event()

    def request_stop(self) -> None:
        """Ask the current run to cancel the skill and finish."""
        self._stop_requested.set()

    async def _lifecycle(self, name: str, call: Awaitable[T]) -> T:
        async with self._lifecycle_lock:
            log.debug("lifecycle_call", call=name)
            return await call

    async def start(self, parameters: dict[str, Any] | None = None) -> bool:
        return await self._lifecycle("start", self.skill.on_start(parameters))

    async def cancel(self, parameters: dict[str, Any] | None = None) -> None:
        await self._lifecycle("cancel", self.skill.on_cancel(parameters))

    async def timeout(self, parameters: dict[str, Any] | None = None) -> None:
        await self._lifecycle("timeout", self.skill.on_timeout(parameters))

    async def pause(self, parameters: dict[str, Any] | None = None) -> None:
        await self._lifecycle("pause", self.skill.on_pause(parameters))

    async def resume(self, parameters: dict[str, Any] | None = None) -> bool:
        return await self._lifecycle("resume", self.skill.on_resume(parameters))

    @asynccontextmanager
    async def session(
        self, parameters: dict[str, Any] | None = None
    ) -> AsyncGenerator[bool, None]:
        """Start the skill and guarantee disposal on the way out.

        Yields:
            Whether every startup step succeeded.
        """
        async with self.skill:
            yield await self.start(parameters)

    async def run(self, parameters: dict[str, Any] | None = None) -> RunResult:
        """Run the skill until stopped or timed out."""
        session_id = uuid4().hex[:8]
        bind_context(skill=self.skill.descriptor.name, session=session_id)
        began = time.monotonic()
        self._stop_requested.clear()
        try:
            async with self.session(parameters) as started:
                log.info(
                    "skill_run_started",
                    started=started,
                    timeout_seconds=self.timeout_seconds,
                )
                try:
                    await asyncio.wait_for(
                        self._stop_requested.wait(), timeout=self.timeout_seconds
                    )
                except asyncio.TimeoutError:
                    await self.timeout(parameters)
                    outcome = RunOutcome.TIMED_OUT
                else:
                    await self.cancel(parameters)
                    outcome = RunOutcome.CANCELLED

            result = RunResult(
                session_id=session_id,
                outcome=outcome,
                started=started,
                duration_seconds=time.monotonic() - began,
                last_error=self.skill.last_error,
            )
            log.info(
                "skill_run_finished",
                outcome=outcome.value,
                duration_seconds=round(result.duration_seconds, 1),
            )
            return result
        finally:
            clear_context()
