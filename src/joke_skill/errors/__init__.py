"""Structured error handling for the joke skill.

Error codes and response records used to report what went wrong
during a skill run without letting the failure reach the host.
"""

from joke_skill.errors.codes import ErrorCode, StartupStage
from joke_skill.errors.responses import (
    ErrorResponse,
    RobotCommandError,
    SkillError,
    StartupError,
    StateTransitionError,
)

__all__ = [
    "ErrorCode",
    "ErrorResponse",
    "RobotCommandError",
    "SkillError",
    "StartupError",
    "StartupStage",
    "StateTransitionError",
]
