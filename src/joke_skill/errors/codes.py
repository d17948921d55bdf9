"""Structured error codes for the joke skill."""

from enum import Enum


class ErrorCode(str, Enum):
    """Structured error codes.

    Error codes are grouped by category:
    - *_FAILED: A startup stage could not complete
    - HARDWARE_ERROR: The robot rejected or failed a command
    - INVALID_TRANSITION: Session state machine misuse
    - CANCELLED / TIMEOUT: Session lifecycle endings
    - CONFIGURATION_ERROR / INTERNAL_ERROR: System-level errors
    """

    # Startup stages
    ASSET_LOAD_FAILED = "ASSET_LOAD_FAILED"
    """Audio or image catalog could not be fetched."""

    PLAYBACK_FAILED = "PLAYBACK_FAILED"
    """Greeting playback or display commands failed."""

    REGISTRATION_FAILED = "REGISTRATION_FAILED"
    """Event subscriptions or recognition startup failed."""

    TIMER_SETUP_FAILED = "TIMER_SETUP_FAILED"
    """Periodic timers could not be started."""

    # Robot
    HARDWARE_ERROR = "HARDWARE_ERROR"
    """General robot command failure."""

    # State machine
    INVALID_TRANSITION = "INVALID_TRANSITION"
    """A session state change not allowed by the transition table."""

    # Lifecycle
    CANCELLED = "CANCELLED"
    """Session was cancelled or paused by the host."""

    TIMEOUT = "TIMEOUT"
    """Session reached its host timeout."""

    # System
    CONFIGURATION_ERROR = "CONFIGURATION_ERROR"
    """Invalid or missing configuration."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """Unexpected internal error."""


class StartupStage(str, Enum):
    """Steps of skill startup, in the order they run."""

    ASSET_LOAD = "asset_load"
    INITIAL_PLAYBACK = "initial_playback"
    EVENT_REGISTRATION = "event_registration"
    TIMER_SETUP = "timer_setup"

    @property
    def error_code(self) -> ErrorCode:
        """Error code reported when this stage fails."""
        return _STAGE_CODES[self]

    @property
    def description(self) -> str:
        """Human-readable failure summary for logs."""
        return _STAGE_DESCRIPTIONS[self]


_STAGE_CODES = {
    StartupStage.ASSET_LOAD: ErrorCode.ASSET_LOAD_FAILED,
    StartupStage.INITIAL_PLAYBACK: ErrorCode.PLAYBACK_FAILED,
    StartupStage.EVENT_REGISTRATION: ErrorCode.REGISTRATION_FAILED,
    StartupStage.TIMER_SETUP: ErrorCode.TIMER_SETUP_FAILED,
}

_STAGE_DESCRIPTIONS = {
    StartupStage.ASSET_LOAD: "Failed to load audio and image files",
    StartupStage.INITIAL_PLAYBACK: "Failed to play audio and display image files",
    StartupStage.EVENT_REGISTRATION: "Failed to register events",
    StartupStage.TIMER_SETUP: "Failed to setup timers",
}
