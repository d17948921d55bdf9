"""Robot messenger interface, asset catalog and mock robot."""

from joke_skill.robot.assets import AssetCatalog
from joke_skill.robot.mock import MockRobot
from joke_skill.robot.protocol import RobotMessenger
from joke_skill.robot.types import (
    AngularUnit,
    AudioDetails,
    AudioPlayCompleteEvent,
    FaceRecognitionEvent,
    ImageDetails,
    KeyPhraseRecognizedEvent,
    RobotCommand,
)

__all__ = [
    "AngularUnit",
    "AssetCatalog",
    "AudioDetails",
    "AudioPlayCompleteEvent",
    "FaceRecognitionEvent",
    "ImageDetails",
    "KeyPhraseRecognizedEvent",
    "MockRobot",
    "RobotCommand",
    "RobotMessenger",
]
