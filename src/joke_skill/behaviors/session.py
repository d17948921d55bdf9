"""Session state of the joke skill.

All state shared between the skill's callbacks lives in one
:class:`SessionRecord`, guarded by a single asyncio lock. Callbacks take
the lock for every read-modify-write of the record; the audio tracker's
condition shares the same lock.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import Enum

from joke_skill.behaviors.audio import AudioCompletionTracker
from joke_skill.errors import ErrorCode, SkillError, StateTransitionError
from joke_skill.robot.assets import AssetCatalog
from joke_skill.utils.logging import get_logger

log = get_logger(__name__)


class SessionState(str, Enum):
    """Where the skill is in its round of jokes."""

    IDLE = "idle"  # Not telling jokes (before start, after the last joke, after teardown)
    READY_TO_JOKE = "ready_to_joke"  # Next heartbeat starts a joke
    TALKING = "talking"  # A joke sequence is in flight


ALLOWED_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.READY_TO_JOKE}),
    SessionState.READY_TO_JOKE: frozenset({SessionState.TALKING, SessionState.IDLE}),
    SessionState.TALKING: frozenset({SessionState.READY_TO_JOKE, SessionState.IDLE}),
}


@dataclass
class SessionRecord:
    """Mutable state of one skill run."""

    joke_count: int = 5
    state: SessionState = SessionState.IDLE
    joke_index: int = 0
    greeting: bool = False  # A face or key phrase greeting is in flight
    face_rearm_pending: bool = False  # A face event was dropped while talking
    catalog: AssetCatalog = field(default_factory=AssetCatalog)
    lock: asyncio.Lock = field(default_factory=asyncio.Lock, repr=False)
    audio: AudioCompletionTracker = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.joke_count < 1:
            raise ValueError(f"joke_count must be at least 1, got {self.joke_count}")
        self.audio = AudioCompletionTracker(self.lock)

    @property
    def is_talking(self) -> bool:
        return self.state == SessionState.TALKING

    def can_transition(self, to_state: SessionState) -> bool:
        return to_state in ALLOWED_TRANSITIONS[self.state]

    def transition(self, to_state: SessionState) -> None:
        """Move to ``to_state``.

        Raises:
            StateTransitionError: If the transition table forbids it.
        """
        if not self.can_transition(to_state):
            raise StateTransitionError(self.state.value, to_state.value)
        log.debug("session_transition", from_state=self.state.value, to_state=to_state.value)
        self.state = to_state

    def reset(self) -> None:
        """Force the record back to a fresh, idle session."""
        self.state = SessionState.IDLE
        self.joke_index = 0
        self.greeting = False
        self.face_rearm_pending = False

    def advance_joke(self) -> bool:
        """Move the cursor to the next joke.

        Returns:
            True if the round is complete and the cursor wrapped to 0.

        Raises:
            SkillError: If no joke is being told.
        """
        if not self.is_talking:
            raise SkillError(
                ErrorCode.INVALID_TRANSITION,
                "Joke cursor can only advance while talking",
                details={"state": self.state.value},
            )
        self.joke_index += 1
        if self.joke_index >= self.joke_count:
            self.joke_index = 0
            return True
        return False
