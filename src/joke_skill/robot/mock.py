"""Mock robot messenger for development and testing.

Records every command it receives, serves fixed asset listings and lets
callers inject the events a real robot would produce (audio finished,
face seen, key phrase heard). Optionally finishes each clip on its own
after a simulated playback time.
"""

from __future__ import annotations

import asyncio
from typing import Any

from joke_skill.errors import RobotCommandError
from joke_skill.robot.protocol import (
    AudioCompleteCallback,
    FaceRecognitionCallback,
    KeyPhraseCallback,
)
from joke_skill.robot.types import (
    AngularUnit,
    AudioDetails,
    AudioPlayCompleteEvent,
    FaceRecognitionEvent,
    ImageDetails,
    KeyPhraseRecognizedEvent,
    RobotCommand,
)
from joke_skill.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_AUDIO = (
    "s_Awe.wav",
    "Misty_Hi.wav",
    "Misty_I_am_Annie.wav",
    "Misty_Hi_Daddy.wav",
    "ok.wav",
    "yeah.wav",
    "alright.wav",
    "joke1.wav",
    "joke2.wav",
    "joke3.wav",
    "joke4.wav",
    "joke5.wav",
    "laught1.wav",
    "laught2.wav",
    "laught3.wav",
    "endjokes.wav",
)

DEFAULT_IMAGES = (
    "e_DefaultContent.jpg",
    "e_ContentLeft.jpg",
    "e_ContentRight.jpg",
    "e_Joy.jpg",
    "e_Joy2.jpg",
    "e_Love.jpg",
    "e_EcstacyHilarious.jpg",
    "e_EcstacyStarryEyed.jpg",
)

UNKNOWN_PERSON = "unknown person"


class MockRobotState:
    """Simulated state of the robot."""

    def __init__(self) -> None:
        self.head = {"pitch": 0.0, "roll": 0.0, "yaw": 0.0}
        self.arms = {"left": 0.0, "right": 0.0}
        self.led = (0, 0, 0)
        self.image: str | None = None
        self.playing: str | None = None
        self.face_recognition_active = False
        self.key_phrase_active = False


class MockRobot:
    """In-memory robot implementing :class:`RobotMessenger`.

    Example usage:
        robot = MockRobot(playback_seconds=0.01)
        skill = TellingJokeSkill(robot, config)
        await skill.on_start({})
        await robot.emit_face("Daddy")
        print([c.name for c in robot.commands])
    """

    def __init__(
        self,
        audio: list[str] | tuple[str, ...] | None = DEFAULT_AUDIO,
        images: list[str] | tuple[str, ...] | None = DEFAULT_IMAGES,
        playback_seconds: float | None = None,
        fail_commands: set[str] | None = None,
    ) -> None:
        """Initialize the mock robot.

        Args:
            audio: Clip names to report from ``get_audio_list``.
            images: Image names to report from ``get_image_list``.
            playback_seconds: If set, every clip reports completion this
                long after it starts playing.
            fail_commands: Command names that raise RobotCommandError.
        """
        self.audio = list(audio or ())
        self.images = list(images or ())
        self.playback_seconds = playback_seconds
        self.fail_commands = set(fail_commands or ())
        self.state = MockRobotState()
        self.commands: list[RobotCommand] = []

        self._audio_callbacks: list[AudioCompleteCallback] = []
        self._face_callbacks: list[FaceRecognitionCallback] = []
        self._key_phrase_callbacks: list[KeyPhraseCallback] = []
        self._playbacks: set[asyncio.Task[None]] = set()

    # ------------------------------------------------------------------
    # Inspection helpers
    # ------------------------------------------------------------------

    def commands_named(self, name: str) -> list[RobotCommand]:
        """All recorded commands with the given name, in order."""
        return [c for c in self.commands if c.name == name]

    def played_clips(self) -> list[str]:
        return [c.args["name"] for c in self.commands_named("play_audio")]

    def displayed_images(self) -> list[str]:
        return [c.args["name"] for c in self.commands_named("display_image")]

    def clear(self) -> None:
        """Forget recorded commands."""
        self.commands.clear()

    @property
    def face_subscriptions(self) -> int:
        return len(self._face_callbacks)

    @property
    def key_phrase_subscriptions(self) -> int:
        return len(self._key_phrase_callbacks)

    @property
    def audio_subscriptions(self) -> int:
        return len(self._audio_callbacks)

    def _record(self, command: str, **args: Any) -> None:
        if command in self.fail_commands:
            raise RobotCommandError(command, f"Mock robot failed command {command}")
        self.commands.append(RobotCommand(name=command, args=args))
        log.debug("mock_command", command=command, **args)

    # ------------------------------------------------------------------
    # Assets
    # ------------------------------------------------------------------

    async def get_audio_list(self) -> list[AudioDetails]:
        self._record("get_audio_list")
        return [AudioDetails(name=name) for name in self.audio]

    async def get_image_list(self) -> list[ImageDetails]:
        self._record("get_image_list")
        return [ImageDetails(name=name) for name in self.images]

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def play_audio(self, name: str, volume: int) -> None:
        self._record("play_audio", name=name, volume=volume)
        self.state.playing = name
        if self.playback_seconds is not None:
            task = asyncio.create_task(self._finish_playback(name))
            self._playbacks.add(task)
            task.add_done_callback(self._playbacks.discard)

    async def _finish_playback(self, name: str) -> None:
        await asyncio.sleep(self.playback_seconds or 0.0)
        await self.emit_audio_complete(name)

    async def display_image(self, name: str, layer: int) -> None:
        self._record("display_image", name=name, layer=layer)
        self.state.image = name

    async def move_head(
        self,
        pitch: float,
        roll: float,
        yaw: float,
        velocity: float,
        unit: AngularUnit = AngularUnit.DEGREES,
    ) -> None:
        self._record(
            "move_head",
            pitch=pitch,
            roll=roll,
            yaw=yaw,
            velocity=velocity,
            unit=unit,
        )
        self.state.head = {"pitch": pitch, "roll": roll, "yaw": yaw}

    async def move_arms(
        self,
        left_position: float,
        right_position: float,
        left_velocity: float,
        right_velocity: float,
        unit: AngularUnit = AngularUnit.DEGREES,
    ) -> None:
        self._record(
            "move_arms",
            left_position=left_position,
            right_position=right_position,
            left_velocity=left_velocity,
            right_velocity=right_velocity,
            unit=unit,
        )
        self.state.arms = {"left": left_position, "right": right_position}

    async def change_led(self, red: int, green: int, blue: int) -> None:
        self._record("change_led", red=red, green=green, blue=blue)
        self.state.led = (red, green, blue)

    async def stop(self) -> None:
        self._record("stop")
        self.state.playing = None
        self._cancel_playbacks()

    async def start_face_recognition(self) -> None:
        self._record("start_face_recognition")
        self.state.face_recognition_active = True

    async def stop_face_recognition(self) -> None:
        self._record("stop_face_recognition")
        self.state.face_recognition_active = False

    async def start_key_phrase_recognition(self) -> None:
        self._record("start_key_phrase_recognition")
        self.state.key_phrase_active = True

    async def stop_key_phrase_recognition(self) -> None:
        self._record("stop_key_phrase_recognition")
        self.state.key_phrase_active = False

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    async def register_audio_play_complete(
        self, callback: AudioCompleteCallback
    ) -> None:
        self._record("register_audio_play_complete")
        self._audio_callbacks.append(callback)

    async def register_face_recognition(
        self, callback: FaceRecognitionCallback
    ) -> None:
        self._record("register_face_recognition")
        self._face_callbacks.append(callback)

    async def register_key_phrase_recognized(
        self, callback: KeyPhraseCallback
    ) -> None:
        self._record("register_key_phrase_recognized")
        self._key_phrase_callbacks.append(callback)

    async def unregister_all_events(self) -> None:
        self._record("unregister_all_events")
        self._audio_callbacks.clear()
        self._face_callbacks.clear()
        self._key_phrase_callbacks.clear()

    async def emit_audio_complete(self, name: str) -> int:
        """Deliver an audio completion to every audio subscriber."""
        if self.state.playing == name:
            self.state.playing = None
        event = AudioPlayCompleteEvent(name=name)
        callbacks = list(self._audio_callbacks)
        for callback in callbacks:
            await callback(event)
        return len(callbacks)

    async def emit_face(self, label: str, recognized: bool | None = None) -> int:
        """Deliver a face event; each subscription fires at most once.

        Returns:
            Number of subscribers the event was delivered to.
        """
        if recognized is None:
            recognized = label != UNKNOWN_PERSON
        event = FaceRecognitionEvent(label=label, recognized=recognized)
        callbacks, self._face_callbacks = self._face_callbacks, []
        for callback in callbacks:
            await callback(event)
        return len(callbacks)

    async def emit_key_phrase(self, confidence: int = 100) -> int:
        """Deliver a key phrase event; each subscription fires at most once."""
        event = KeyPhraseRecognizedEvent(confidence=confidence)
        callbacks, self._key_phrase_callbacks = self._key_phrase_callbacks, []
        for callback in callbacks:
            await callback(event)
        return len(callbacks)

    def _cancel_playbacks(self) -> None:
        for task in list(self._playbacks):
            task.cancel()

    async def close(self) -> None:
        """Cancel simulated playbacks still in flight."""
        self._cancel_playbacks()
        if self._playbacks:
            await asyncio.gather(*self._playbacks, return_exceptions=True)
