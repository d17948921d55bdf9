"""Telling-joke skill coordinator.

The robot greets the room, then tells a round of jokes, one per
heartbeat tick, while three ambient timers keep its head, arms and LED
moving. Faces seen between jokes get a greeting; faces seen during a
joke are ignored.

Everything runs on one event loop. Timer ticks and robot events are
coroutines that share a single :class:`SessionRecord`; every pause is a
cancellation checkpoint, so cancelling the session stops a running
sequence at its next pause without interrupting a command already sent.
"""

from __future__ import annotations

import random
from collections.abc import Awaitable
from typing import Any

from joke_skill.behaviors.ambient import AmbientMotion
from joke_skill.behaviors.cancellation import CancellationToken
from joke_skill.behaviors.session import SessionRecord, SessionState
from joke_skill.behaviors.timers import PeriodicTimer
from joke_skill.errors import ErrorCode, ErrorResponse, StartupError, StartupStage
from joke_skill.robot.assets import AssetCatalog
from joke_skill.robot.protocol import RobotMessenger
from joke_skill.robot.types import (
    AngularUnit,
    AudioPlayCompleteEvent,
    FaceRecognitionEvent,
    KeyPhraseRecognizedEvent,
)
from joke_skill.utils.config import SkillConfig, SkillSection
from joke_skill.utils.logging import get_logger

log = get_logger(__name__)


class TellingJokeSkill:
    """Behavior coordinator for the telling-joke skill.

    The host drives the lifecycle (``on_start``, ``on_cancel``,
    ``on_timeout``, ``on_pause``, ``on_resume``) and must release the
    timers with :meth:`dispose`, most simply through ``async with``.

    Example usage:
        async with TellingJokeSkill(robot, config) as skill:
            await skill.on_start({})
            ...
            await skill.on_cancel({})
    """

    def __init__(
        self,
        robot: RobotMessenger,
        config: SkillConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the skill.

        Args:
            robot: Messenger used for every command and event subscription.
            config: Skill configuration. Uses defaults if not provided.
            rng: Random source for clip, image and motion choices.
        """
        self.robot = robot
        self.config = config or SkillConfig()
        self._rng = rng or random.Random()
        self.session = SessionRecord(joke_count=len(self.config.content.joke_clips))
        self.ambient = AmbientMotion(robot, self.config.ambient, self._rng)
        self.last_error: ErrorResponse | None = None
        self._token = CancellationToken()
        self._timers: list[PeriodicTimer] = []
        self._disposed = False

    @property
    def descriptor(self) -> SkillSection:
        return self.config.skill

    @property
    def state(self) -> SessionState:
        return self.session.state

    @property
    def joke_index(self) -> int:
        return self.session.joke_index

    @property
    def timers(self) -> tuple[PeriodicTimer, ...]:
        return tuple(self._timers)

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    @property
    def disposed(self) -> bool:
        return self._disposed

    async def __aenter__(self) -> TellingJokeSkill:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.dispose()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def on_start(self, parameters: dict[str, Any] | None = None) -> bool:
        """Greet, subscribe to events and start the timers.

        Never raises: a failure aborts the remaining steps, is logged with
        the stage that broke and kept in :attr:`last_error`. The host's
        cancel or timeout path cleans up whatever was set up.

        Returns:
            True if every startup step completed.
        """
        if self._disposed:
            log.warning("Start ignored, skill already disposed")
            return False

        log.info("skill_starting", skill=self.descriptor.name, parameters=parameters or {})
        # Abandon whatever the previous start left running
        self._token.cancel()
        await self._stop_timers()
        self._token = CancellationToken()
        token = self._token
        async with self.session.lock:
            self.session.reset()
            self.session.catalog = AssetCatalog(fallback_clip=self.config.content.fallback_clip)
        self.last_error = None

        stage = StartupStage.ASSET_LOAD
        try:
            catalog = await AssetCatalog.fetch(self.robot, self.config.content.fallback_clip)
            async with self.session.lock:
                self.session.catalog = catalog
            if not await token.wait(self.config.timing.startup_settle):
                return self._start_interrupted(stage)

            stage = StartupStage.INITIAL_PLAYBACK
            if not await self._greet_room(token):
                return self._start_interrupted(stage)

            stage = StartupStage.EVENT_REGISTRATION
            if token.cancelled:
                return self._start_interrupted(stage)
            await self._register_events()

            stage = StartupStage.TIMER_SETUP
            self._start_timers()
        except Exception as e:
            error = StartupError(stage, e)
            self.last_error = error.to_response()
            log.error(
                "skill_start_failed",
                stage=stage.value,
                reason=stage.description,
                error=str(e),
                exc_info=True,
            )
            return False

        log.info("skill_started", state=self.session.state.value)
        return True

    async def on_cancel(self, parameters: dict[str, Any] | None = None) -> None:
        """Host cancelled the skill: red LED, then teardown."""
        log.info("skill_cancelled", parameters=parameters or {})
        await self._best_effort("change_led", self.robot.change_led(*self.config.colors.cancel))
        await self._teardown(ErrorCode.CANCELLED)

    async def on_timeout(self, parameters: dict[str, Any] | None = None) -> None:
        """Host timed the skill out: blue LED, then teardown."""
        log.info("skill_timed_out", parameters=parameters or {})
        await self._best_effort("change_led", self.robot.change_led(*self.config.colors.timeout))
        await self._teardown(ErrorCode.TIMEOUT)

    async def on_pause(self, parameters: dict[str, Any] | None = None) -> None:
        """Pausing keeps no state: it is a cancel."""
        log.info("skill_paused")
        await self.on_cancel(parameters)

    async def on_resume(self, parameters: dict[str, Any] | None = None) -> bool:
        """Resuming starts over from scratch."""
        log.info("skill_resumed")
        return await self.on_start(parameters)

    async def dispose(self) -> None:
        """Release the timers. Only the first call does anything."""
        if self._disposed:
            return
        self._disposed = True
        self._token.cancel()
        await self._stop_timers()
        log.info("skill_disposed", skill=self.descriptor.name)

    # ------------------------------------------------------------------
    # Timer callbacks
    # ------------------------------------------------------------------

    async def heartbeat(self) -> None:
        """Tell the next joke if the session is ready for one."""
        token = self._token
        if not await token.wait(0):
            return

        session = self.session
        async with session.lock:
            if session.state != SessionState.READY_TO_JOKE or session.greeting:
                return
            session.transition(SessionState.TALKING)
            joke_index = session.joke_index

        log.info("joke_starting", joke_index=joke_index)
        try:
            completed = await self._tell_joke(token, joke_index)
            if not completed:
                log.info("joke_interrupted", joke_index=joke_index)
        finally:
            await self._finish_talking(token)

    async def _tell_joke(self, token: CancellationToken, joke_index: int) -> bool:
        """Run one joke sequence; False if a checkpoint saw cancellation."""
        content = self.config.content
        timing = self.config.timing
        volume = self.config.volumes.joke

        await self._play(self._rng.choice(content.mood_clips), volume)
        if not await token.wait(timing.mood_pause):
            return False

        if not await self._play_and_wait(token, content.joke_clips[joke_index], volume):
            return False

        await self._display(content.hilarious_image)
        await self._play(self._rng.choice(content.laugh_clips), volume)
        if not await token.wait(timing.laugh_pause):
            return False
        await self._display(content.default_image)

        async with self.session.lock:
            round_done = self.session.advance_joke()
            next_index = self.session.joke_index
        log.info("joke_told", joke_index=joke_index, next_index=next_index)

        if round_done:
            log.info("joke_round_finished")
            if not await self._play_and_wait(token, content.end_clip, volume):
                return False
            next_state = SessionState.IDLE
        else:
            next_state = SessionState.READY_TO_JOKE

        async with self.session.lock:
            self.session.transition(next_state)
        return True

    async def _finish_talking(self, token: CancellationToken) -> None:
        async with self.session.lock:
            # Abandoned mid-sequence, unless a restart already owns the record
            if self.session.is_talking and token is self._token:
                self.session.transition(SessionState.IDLE)
        await self._renew_face_subscription(token)

    # ------------------------------------------------------------------
    # Event callbacks
    # ------------------------------------------------------------------

    async def on_audio_play_complete(self, event: AudioPlayCompleteEvent) -> None:
        log.debug("audio_play_complete", clip=event.name)
        await self.session.audio.record(event.name)

    async def on_face_recognized(self, event: FaceRecognitionEvent) -> None:
        """Greet a face, then subscribe to exactly one more face event."""
        token = self._token
        session = self.session
        async with session.lock:
            if session.is_talking or session.greeting:
                session.face_rearm_pending = True
                log.debug("face_event_dropped", label=event.label, state=session.state.value)
                return
            session.greeting = True

        try:
            image, clip = self._face_greeting(event)
            log.info("face_greeting", label=event.label, image=image)
            await self._display(image)
            await self._play(clip, self.config.volumes.face)
            if not await token.wait(self.config.timing.face_hold):
                return
            await self._display(self.config.content.default_image)
            if not await token.wait(self.config.timing.face_rearm_delay):
                return
            async with session.lock:
                session.face_rearm_pending = False
            await self.robot.register_face_recognition(self.on_face_recognized)
        finally:
            async with session.lock:
                session.greeting = False

    async def on_key_phrase_recognized(self, event: KeyPhraseRecognizedEvent) -> None:
        """Acknowledge the wake phrase and ask for another round of jokes."""
        token = self._token
        session = self.session
        async with session.lock:
            acknowledge = not (session.is_talking or session.greeting)
            if acknowledge:
                session.greeting = True
        log.info("key_phrase_heard", confidence=event.confidence, acknowledged=acknowledge)

        try:
            if acknowledge:
                await self._display(self.config.content.key_phrase_image)
                await self._play(self.config.content.hello_clip, self.config.volumes.key_phrase)
                if not await token.wait(self.config.timing.key_phrase_pause):
                    return
            await self.robot.start_key_phrase_recognition()
            await self.robot.register_key_phrase_recognized(self.on_key_phrase_recognized)
            async with session.lock:
                if session.state == SessionState.IDLE:
                    session.transition(SessionState.READY_TO_JOKE)
                    log.info("joke_round_requested")
        finally:
            if acknowledge:
                async with session.lock:
                    session.greeting = False
                await self._renew_face_subscription(token)

    def _face_greeting(self, event: FaceRecognitionEvent) -> tuple[str, str]:
        """Pick the (image, clip) pair for a face."""
        content = self.config.content
        if not event.recognized or event.label == content.unknown_label:
            return self._rng.choice(content.unknown_images), content.unknown_clip
        if event.label == content.special_label:
            return content.special_image, content.special_clip
        return content.known_image, content.known_clip

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    async def _greet_room(self, token: CancellationToken) -> bool:
        content = self.config.content
        timing = self.config.timing
        behavior = self.config.behavior

        await self._play(content.hello_clip, self.config.volumes.greeting)
        if not await token.wait(timing.hello_pause):
            return False
        await self._play(content.introduction_clip, self.config.volumes.greeting)
        if not await token.wait(timing.introduction_pause):
            return False
        await self.robot.change_led(*self.config.colors.startup)
        await self._display(content.default_image)
        await self.robot.move_head(
            behavior.startup_head_pitch,
            0,
            0,
            behavior.startup_head_velocity,
            AngularUnit.DEGREES,
        )
        if token.cancelled:
            return False
        async with self.session.lock:
            self.session.transition(SessionState.READY_TO_JOKE)
        return True

    async def _register_events(self) -> None:
        await self.robot.register_audio_play_complete(self.on_audio_play_complete)
        await self.robot.start_face_recognition()
        await self.robot.register_face_recognition(self.on_face_recognized)
        if self.config.behavior.key_phrase_enabled:
            await self.robot.start_key_phrase_recognition()
            await self.robot.register_key_phrase_recognized(self.on_key_phrase_recognized)

    def _start_timers(self) -> None:
        timing = self.config.timing
        self._timers = [
            PeriodicTimer(
                "heartbeat",
                self.heartbeat,
                timing.heartbeat.initial_delay,
                timing.heartbeat.period,
            ),
            PeriodicTimer(
                "head_motion",
                self.ambient.move_head,
                timing.head_motion.initial_delay,
                timing.head_motion.period,
            ),
            PeriodicTimer(
                "arm_motion",
                self.ambient.move_arms,
                timing.arm_motion.initial_delay,
                timing.arm_motion.period,
            ),
            PeriodicTimer(
                "led",
                self.ambient.change_led,
                timing.led.initial_delay,
                timing.led.period,
            ),
        ]
        for timer in self._timers:
            timer.start()

    async def _stop_timers(self) -> None:
        timers, self._timers = self._timers, []
        for timer in timers:
            await timer.stop()

    def _start_interrupted(self, stage: StartupStage) -> bool:
        log.info("skill_start_interrupted", stage=stage.value)
        return False

    async def _teardown(self, reason: ErrorCode) -> None:
        """Stop everything the session started and restore the face."""
        self._token.cancel()
        await self._stop_timers()
        await self._best_effort("stop", self.robot.stop())
        await self._best_effort(
            "stop_key_phrase_recognition", self.robot.stop_key_phrase_recognition()
        )
        await self._best_effort("stop_face_recognition", self.robot.stop_face_recognition())
        await self._best_effort("unregister_all_events", self.robot.unregister_all_events())
        await self._best_effort(
            "display_image", self._display(self.config.content.default_image)
        )
        async with self.session.lock:
            self.session.reset()
        log.info("skill_torn_down", reason=reason.value)

    async def _best_effort(self, step: str, command: Awaitable[None]) -> None:
        try:
            await command
        except Exception as e:
            log.warning("Teardown step failed", step=step, error=str(e))

    async def _renew_face_subscription(self, token: CancellationToken) -> None:
        """Re-subscribe for a face event dropped while busy."""
        if token.cancelled:
            return
        async with self.session.lock:
            pending = self.session.face_rearm_pending
            self.session.face_rearm_pending = False
        if pending:
            log.debug("face_subscription_renewed")
            await self.robot.register_face_recognition(self.on_face_recognized)

    async def _display(self, image: str) -> None:
        if not self.session.catalog.has_image(image):
            log.debug("image_not_in_catalog", image=image)
        await self.robot.display_image(image, self.config.behavior.display_layer)

    async def _play(self, clip: str, volume: int) -> str:
        """Play ``clip`` or, if the robot lacks it, the fallback clip."""
        resolved = self.session.catalog.resolve_audio(clip)
        await self.robot.play_audio(resolved, volume)
        return resolved

    async def _play_and_wait(
        self, token: CancellationToken, clip: str, volume: int
    ) -> bool:
        """Play a clip, wait for it to finish, then hold for the post-clip pause."""
        timing = self.config.timing
        resolved = self.session.catalog.resolve_audio(clip)
        armed = self.session.audio.arm(resolved)
        await self.robot.play_audio(resolved, volume)
        finished = await self.session.audio.wait_for(
            resolved, armed, timing.audio_complete_timeout
        )
        if not finished:
            log.info("audio_completion_not_seen", clip=resolved)
        return await token.wait(timing.post_joke_pause)
