"""Pytest fixtures for joke skill tests."""

from __future__ import annotations

import random
from collections.abc import AsyncIterator
from pathlib import Path

import pytest

from joke_skill.behaviors.coordinator import TellingJokeSkill
from joke_skill.robot.mock import MockRobot
from joke_skill.utils.config import SkillConfig, TimerSpec

# Timers that never fire during a unit test; tests call the ticks directly.
DORMANT = TimerSpec(initial_delay=3600.0, period=3600.0)


def make_fast_config() -> SkillConfig:
    """Configuration with every scripted pause shrunk to nothing."""
    config = SkillConfig()
    timing = config.timing
    timing.heartbeat = DORMANT
    timing.head_motion = DORMANT
    timing.arm_motion = DORMANT
    timing.led = DORMANT
    for name in (
        "startup_settle",
        "hello_pause",
        "introduction_pause",
        "mood_pause",
        "post_joke_pause",
        "laugh_pause",
        "face_hold",
        "face_rearm_delay",
        "key_phrase_pause",
    ):
        setattr(timing, name, 0.0)
    timing.audio_complete_timeout = 0.05
    return config


@pytest.fixture
def anyio_backend() -> str:
    """Specify async backend for pytest-asyncio."""
    return "asyncio"


@pytest.fixture
def fast_config() -> SkillConfig:
    """Configuration whose waits all complete immediately."""
    return make_fast_config()


@pytest.fixture
async def robot() -> AsyncIterator[MockRobot]:
    """Mock robot that finishes every clip almost instantly."""
    mock = MockRobot(playback_seconds=0.001)
    yield mock
    await mock.close()


@pytest.fixture
async def skill(robot: MockRobot, fast_config: SkillConfig) -> AsyncIterator[TellingJokeSkill]:
    """Skill wired to the mock robot, disposed after the test."""
    async with TellingJokeSkill(robot, fast_config, rng=random.Random(1234)) as s:
        yield s


@pytest.fixture
async def started_skill(skill: TellingJokeSkill, robot: MockRobot) -> TellingJokeSkill:
    """Skill that has completed startup, with startup commands forgotten."""
    assert await skill.on_start({})
    robot.clear()
    return skill


@pytest.fixture
def temp_config_dir(tmp_path: Path) -> Path:
    """Create a temporary config directory with a test file."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()

    config_file = config_dir / "default.yaml"
    config_file.write_text("""
version: "1.0"
skill:
  name: TestJokes
  timeout_seconds: 60
timing:
  heartbeat: {initial_delay: 1.0, period: 2.0}
behavior:
  key_phrase_enabled: true
""")

    return config_dir
