"""Joke skill behaviors.

The coordinator sequences the scripted parts (startup greeting, joke
round, face and key phrase greetings) on top of four periodic timers:

- heartbeat: tells the next joke when the session is ready for one
- head motion, arm motion, LED: ambient fidgeting, independent of the
  session state
"""

from joke_skill.behaviors.ambient import AmbientMotion, ArmTarget, HeadTarget, LedColor
from joke_skill.behaviors.audio import AudioCompletionTracker
from joke_skill.behaviors.cancellation import CancellationToken
from joke_skill.behaviors.coordinator import TellingJokeSkill
from joke_skill.behaviors.session import ALLOWED_TRANSITIONS, SessionRecord, SessionState
from joke_skill.behaviors.timers import PeriodicTimer

__all__ = [
    # Coordinator
    "TellingJokeSkill",
    # Session state
    "SessionState",
    "SessionRecord",
    "ALLOWED_TRANSITIONS",
    # Building blocks
    "AudioCompletionTracker",
    "CancellationToken",
    "PeriodicTimer",
    # Ambient motion
    "AmbientMotion",
    "HeadTarget",
    "ArmTarget",
    "LedColor",
]
