"""Structured error responses for the joke skill.

Provides the error record kept by the coordinator after a soft failure
and the exception classes raised inside the skill.
"""

from dataclasses import dataclass
from typing import Any

from joke_skill.errors.codes import ErrorCode, StartupStage


@dataclass
class ErrorResponse:
    """Structured record of a failure.

    Attributes:
        code: The error code categorizing this error.
        message: Human-readable error message.
        details: Optional additional context about the error.
    """

    code: ErrorCode
    message: str
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "error": True,
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result

    @classmethod
    def from_exception(cls, exc: Exception, code: ErrorCode | None = None) -> "ErrorResponse":
        """Create ErrorResponse from an exception.

        Args:
            exc: The exception to convert.
            code: Optional error code override.
        """
        if isinstance(exc, SkillError):
            return exc.to_response()

        return cls(
            code=code or ErrorCode.INTERNAL_ERROR,
            message=str(exc),
            details={"exception_type": type(exc).__name__},
        )


class SkillError(Exception):
    """Base exception class for joke skill errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details = details

    def to_response(self) -> ErrorResponse:
        """Convert to ErrorResponse."""
        return ErrorResponse(code=self.code, message=str(self), details=self.details)


class RobotCommandError(SkillError):
    """The robot messenger failed to carry out a command."""

    def __init__(self, command: str, message: str) -> None:
        super().__init__(
            code=ErrorCode.HARDWARE_ERROR,
            message=message,
            details={"command": command},
        )
        self.command = command


class StateTransitionError(SkillError):
    """Raised when an invalid session state transition is attempted.

    This indicates a programming error in the coordinator, never a
    condition caused by the robot or the host.
    """

    def __init__(self, from_state: str, to_state: str) -> None:
        super().__init__(
            code=ErrorCode.INVALID_TRANSITION,
            message=f"Invalid state transition: {from_state} -> {to_state}",
            details={"from_state": from_state, "to_state": to_state},
        )
        self.from_state = from_state
        self.to_state = to_state


class StartupError(SkillError):
    """A startup stage failed.

    Carries the stage so the failure can be logged and reported with the
    step that broke, while the original exception stays chained.
    """

    def __init__(self, stage: StartupStage, original_error: Exception) -> None:
        super().__init__(
            code=stage.error_code,
            message=f"{stage.description}: {original_error}",
            details={
                "stage": stage.value,
                "exception_type": type(original_error).__name__,
            },
        )
        self.stage = stage
        self.original_error = original_error
