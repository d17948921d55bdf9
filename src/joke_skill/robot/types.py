"""Value types exchanged with the robot messenger."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class AngularUnit(str, Enum):
    """Unit of head and arm angles."""

    DEGREES = "degrees"
    RADIANS = "radians"


@dataclass(frozen=True)
class AudioDetails:
    """An audio clip stored on the robot."""

    name: str
    system_asset: bool = False


@dataclass(frozen=True)
class ImageDetails:
    """An image stored on the robot."""

    name: str
    width: int | None = None
    height: int | None = None
    system_asset: bool = False


@dataclass(frozen=True)
class AudioPlayCompleteEvent:
    """A clip finished playing."""

    name: str


@dataclass(frozen=True)
class FaceRecognitionEvent:
    """A face was detected, and possibly recognized.

    Attributes:
        label: Identity label of the face ("unknown person" when the
            face was detected but not matched to a trained identity).
        recognized: Whether the label came from a trained identity.
    """

    label: str
    recognized: bool = True


@dataclass(frozen=True)
class KeyPhraseRecognizedEvent:
    """The wake key phrase was heard."""

    confidence: int = 100


@dataclass
class RobotCommand:
    """A command received by the mock robot, kept for inspection."""

    name: str
    args: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)
