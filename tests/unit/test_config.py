"""Unit tests for configuration management."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from joke_skill.utils.config import (
    AmbientConfig,
    ColorConfig,
    ContentConfig,
    EnvSettings,
    SkillConfig,
    TimingConfig,
    VolumeConfig,
    load_config,
)


class TestTimingConfig:
    """Tests for TimingConfig."""

    def test_timer_defaults(self) -> None:
        """Timer periods match the skill's cadence."""
        timing = TimingConfig()
        assert (timing.heartbeat.initial_delay, timing.heartbeat.period) == (5.0, 3.0)
        assert (timing.head_motion.initial_delay, timing.head_motion.period) == (5.0, 7.0)
        assert (timing.arm_motion.initial_delay, timing.arm_motion.period) == (5.0, 4.0)
        assert (timing.led.initial_delay, timing.led.period) == (1.0, 1.0)

    def test_sequence_pauses(self) -> None:
        timing = TimingConfig()
        assert timing.mood_pause == 3.0
        assert timing.audio_complete_timeout == 3.0
        assert timing.post_joke_pause == 9.0
        assert timing.laugh_pause == 4.0
        assert timing.face_hold == 5.0
        assert timing.face_rearm_delay == 5.0

    def test_period_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            TimingConfig(heartbeat={"initial_delay": 0.0, "period": 0.0})


class TestAmbientConfig:
    """Tests for AmbientConfig."""

    def test_defaults(self) -> None:
        ambient = AmbientConfig()
        assert ambient.head_pitch == (-20, 15)
        assert ambient.head_roll == (-30, 30)
        assert ambient.head_yaw == (-60, 60)
        assert ambient.head_velocity == (10, 75)
        assert ambient.arm_position == (-90, 90)
        assert ambient.arm_velocity == (10, 90)
        assert ambient.led_channel == (0, 256)

    def test_rejects_empty_range(self) -> None:
        """A range whose low bound is not below its high bound is invalid."""
        with pytest.raises(ValidationError):
            AmbientConfig(head_yaw=(10, 10))


class TestContentConfig:
    def test_round_has_five_jokes(self) -> None:
        content = ContentConfig()
        assert content.joke_clips == [
            "joke1.wav",
            "joke2.wav",
            "joke3.wav",
            "joke4.wav",
            "joke5.wav",
        ]
        assert content.fallback_clip == "s_Awe.wav"

    def test_face_greetings(self) -> None:
        content = ContentConfig()
        assert content.special_label == "Daddy"
        assert content.special_image == "e_EcstacyStarryEyed.jpg"
        assert content.special_clip == "Misty_Hi_Daddy.wav"
        assert content.unknown_label == "unknown person"
        assert len(content.unknown_images) == 6

    def test_jokes_required(self) -> None:
        with pytest.raises(ValidationError):
            ContentConfig(joke_clips=[])


class TestVolumesAndColors:
    def test_volume_defaults(self) -> None:
        volumes = VolumeConfig()
        assert volumes.greeting == 80
        assert volumes.joke == 60
        assert volumes.face == 80

    def test_volume_bounds(self) -> None:
        with pytest.raises(ValidationError):
            VolumeConfig(joke=101)

    def test_color_defaults(self) -> None:
        colors = ColorConfig()
        assert colors.cancel == (255, 0, 0)
        assert colors.timeout == (0, 0, 255)
        assert colors.startup == (255, 255, 255)

    def test_color_channel_bounds(self) -> None:
        with pytest.raises(ValidationError):
            ColorConfig(cancel=(256, 0, 0))


class TestSkillConfig:
    """Tests for complete SkillConfig."""

    def test_defaults(self) -> None:
        config = SkillConfig()
        assert config.version == "1.0"
        assert config.skill.name == "TellingJokeSkill"
        assert config.skill.unique_id == "a365d72a-b9f1-4417-9315-ca0ce157df51"
        assert config.skill.timeout_seconds == 300.0
        assert config.behavior.key_phrase_enabled is False

    def test_from_yaml(self, temp_config_dir: Path) -> None:
        config = SkillConfig.from_yaml(temp_config_dir / "default.yaml")
        assert config.skill.name == "TestJokes"
        assert config.skill.timeout_seconds == 60
        assert config.timing.heartbeat.period == 2.0
        assert config.behavior.key_phrase_enabled is True
        # Untouched sections keep their defaults
        assert config.volumes.joke == 60

    def test_empty_yaml_gives_defaults(self, tmp_path: Path) -> None:
        config_file = tmp_path / "empty.yaml"
        config_file.write_text("")
        assert SkillConfig.from_yaml(config_file) == SkillConfig()

    def test_invalid_version(self) -> None:
        with pytest.raises(ValidationError):
            SkillConfig(version="one")


class TestLoadConfig:
    def test_explicit_path(self, temp_config_dir: Path) -> None:
        config = load_config(temp_config_dir / "default.yaml")
        assert config.skill.name == "TestJokes"

    def test_search_paths(self, temp_config_dir: Path, tmp_path: Path) -> None:
        config = load_config(
            default_paths=[tmp_path / "missing.yaml", temp_config_dir / "default.yaml"]
        )
        assert config.skill.name == "TestJokes"

    def test_defaults_when_nothing_found(self, tmp_path: Path) -> None:
        config = load_config(default_paths=[tmp_path / "missing.yaml"])
        assert config == SkillConfig()

    def test_missing_explicit_path_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


class TestEnvSettings:
    def test_reads_prefixed_variables(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("JOKE_SKILL_DEBUG", "true")
        monkeypatch.setenv("JOKE_SKILL_LOG_JSON", "1")
        settings = EnvSettings(_env_file=None)
        assert settings.debug is True
        assert settings.log_json is True

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("JOKE_SKILL_DEBUG", raising=False)
        monkeypatch.delenv("JOKE_SKILL_LOG_JSON", raising=False)
        monkeypatch.delenv("JOKE_SKILL_CONFIG_PATH", raising=False)
        settings = EnvSettings(_env_file=None)
        assert settings.debug is False
        assert settings.config_path is None
