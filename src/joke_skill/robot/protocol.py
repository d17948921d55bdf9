"""Interface of the robot messenger the skill talks to.

The host runtime hands the skill an object implementing this protocol.
Commands are issue-and-forget: they return once the robot accepted them,
not once the motion or playback finished.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Protocol, runtime_checkable

from joke_skill.robot.types import (
    AngularUnit,
    AudioDetails,
    AudioPlayCompleteEvent,
    FaceRecognitionEvent,
    ImageDetails,
    KeyPhraseRecognizedEvent,
)

AudioCompleteCallback = Callable[[AudioPlayCompleteEvent], Awaitable[None]]
FaceRecognitionCallback = Callable[[FaceRecognitionEvent], Awaitable[None]]
KeyPhraseCallback = Callable[[KeyPhraseRecognizedEvent], Awaitable[None]]


@runtime_checkable
class RobotMessenger(Protocol):
    """Robot command sink and event source."""

    # Assets
    async def get_audio_list(self) -> list[AudioDetails]: ...

    async def get_image_list(self) -> list[ImageDetails]: ...

    # Commands
    async def play_audio(self, name: str, volume: int) -> None: ...

    async def display_image(self, name: str, layer: int) -> None: ...

    async def move_head(
        self,
        pitch: float,
        roll: float,
        yaw: float,
        velocity: float,
        unit: AngularUnit = AngularUnit.DEGREES,
    ) -> None: ...

    async def move_arms(
        self,
        left_position: float,
        right_position: float,
        left_velocity: float,
        right_velocity: float,
        unit: AngularUnit = AngularUnit.DEGREES,
    ) -> None: ...

    async def change_led(self, red: int, green: int, blue: int) -> None: ...

    async def stop(self) -> None: ...

    async def start_face_recognition(self) -> None: ...

    async def stop_face_recognition(self) -> None: ...

    async def start_key_phrase_recognition(self) -> None: ...

    async def stop_key_phrase_recognition(self) -> None: ...

    # Events
    async def register_audio_play_complete(
        self, callback: AudioCompleteCallback
    ) -> None:
        """Subscribe to every audio completion until unregistered."""
        ...

    async def register_face_recognition(
        self, callback: FaceRecognitionCallback
    ) -> None:
        """Subscribe to the next face recognition event only."""
        ...

    async def register_key_phrase_recognized(
        self, callback: KeyPhraseCallback
    ) -> None:
        """Subscribe to the next key phrase event only."""
        ...

    async def unregister_all_events(self) -> None: ...
