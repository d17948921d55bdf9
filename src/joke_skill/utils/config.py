"""Configuration management for the joke skill.

Loads configuration from YAML files and validates it against Pydantic
models. Every duration, clip name and motion range the skill uses lives
here so that tests (and impatient humans) can shrink the timings.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

Range = tuple[int, int]
Color = tuple[int, int, int]


class SkillSection(BaseModel):
    """Identity of the skill as seen by the host runtime."""

    name: str = Field(default="TellingJokeSkill")
    unique_id: str = Field(default="a365d72a-b9f1-4417-9315-ca0ce157df51")
    timeout_seconds: float = Field(
        default=300.0, gt=0, description="Host cancels the run after this long"
    )
    log_level: str = Field(default="VERBOSE")


class TimerSpec(BaseModel):
    """Initial delay and period of one periodic timer, in seconds."""

    initial_delay: float = Field(ge=0.0)
    period: float = Field(gt=0.0)


class TimingConfig(BaseModel):
    """Timer periods and scripted waits (seconds)."""

    heartbeat: TimerSpec = Field(
        default_factory=lambda: TimerSpec(initial_delay=5.0, period=3.0)
    )
    head_motion: TimerSpec = Field(
        default_factory=lambda: TimerSpec(initial_delay=5.0, period=7.0)
    )
    arm_motion: TimerSpec = Field(
        default_factory=lambda: TimerSpec(initial_delay=5.0, period=4.0)
    )
    led: TimerSpec = Field(
        default_factory=lambda: TimerSpec(initial_delay=1.0, period=1.0)
    )

    # Startup greeting
    startup_settle: float = Field(default=2.0, ge=0.0)
    hello_pause: float = Field(default=2.0, ge=0.0)
    introduction_pause: float = Field(default=4.0, ge=0.0)

    # Joke sequence
    mood_pause: float = Field(default=3.0, ge=0.0)
    audio_complete_timeout: float = Field(default=3.0, ge=0.0)
    post_joke_pause: float = Field(default=9.0, ge=0.0)
    laugh_pause: float = Field(default=4.0, ge=0.0)

    # Face greeting
    face_hold: float = Field(default=5.0, ge=0.0)
    face_rearm_delay: float = Field(default=5.0, ge=0.0)

    key_phrase_pause: float = Field(default=3.0, ge=0.0)


class AmbientConfig(BaseModel):
    """Half-open integer ranges ``[low, high)`` for the fidget ticks."""

    head_pitch: Range = (-20, 15)
    head_roll: Range = (-30, 30)
    head_yaw: Range = (-60, 60)
    head_velocity: Range = (10, 75)
    arm_position: Range = (-90, 90)
    arm_velocity: Range = (10, 90)
    led_channel: Range = (0, 256)

    @field_validator("*")
    @classmethod
    def _check_range(cls, value: Range) -> Range:
        low, high = value
        if low >= high:
            raise ValueError(f"range low must be below high, got {value}")
        return value


class ContentConfig(BaseModel):
    """Names of the clips and images the skill plays."""

    fallback_clip: str = "s_Awe.wav"
    hello_clip: str = "Misty_Hi.wav"
    introduction_clip: str = "Misty_I_am_Annie.wav"
    mood_clips: list[str] = Field(
        default_factory=lambda: ["ok.wav", "yeah.wav", "alright.wav"], min_length=1
    )
    joke_clips: list[str] = Field(
        default_factory=lambda: [
            "joke1.wav",
            "joke2.wav",
            "joke3.wav",
            "joke4.wav",
            "joke5.wav",
        ],
        min_length=1,
    )
    laugh_clips: list[str] = Field(
        default_factory=lambda: ["laught1.wav", "laught2.wav", "laught3.wav"],
        min_length=1,
    )
    end_clip: str = "endjokes.wav"

    default_image: str = "e_DefaultContent.jpg"
    hilarious_image: str = "e_EcstacyHilarious.jpg"
    key_phrase_image: str = "e_Love.jpg"

    # Face greetings
    special_label: str = "Daddy"
    special_image: str = "e_EcstacyStarryEyed.jpg"
    special_clip: str = "Misty_Hi_Daddy.wav"
    known_image: str = "e_Joy.jpg"
    known_clip: str = "Misty_Hi.wav"
    unknown_label: str = "unknown person"
    unknown_clip: str = "Misty_Hi.wav"
    unknown_images: list[str] = Field(
        default_factory=lambda: [
            "e_DefaultContent.jpg",
            "e_ContentLeft.jpg",
            "e_ContentRight.jpg",
            "e_Joy.jpg",
            "e_Joy2.jpg",
            "e_Love.jpg",
        ],
        min_length=1,
    )


class VolumeConfig(BaseModel):
    """Playback volumes (0-100)."""

    greeting: int = Field(default=80, ge=0, le=100)
    joke: int = Field(default=60, ge=0, le=100)
    face: int = Field(default=80, ge=0, le=100)
    key_phrase: int = Field(default=60, ge=0, le=100)


class ColorConfig(BaseModel):
    """LED colors for lifecycle transitions."""

    startup: Color = (255, 255, 255)
    cancel: Color = (255, 0, 0)
    timeout: Color = (0, 0, 255)

    @field_validator("*")
    @classmethod
    def _check_channels(cls, value: Color) -> Color:
        if any(not 0 <= channel <= 255 for channel in value):
            raise ValueError(f"LED channels must be within 0-255, got {value}")
        return value


class BehaviorConfig(BaseModel):
    """Behavior switches and fixed poses."""

    key_phrase_enabled: bool = Field(
        default=False, description="Listen for the wake phrase to restart jokes"
    )
    display_layer: int = Field(default=1, ge=0)
    startup_head_pitch: int = Field(default=10)
    startup_head_velocity: int = Field(default=60, ge=1, le=100)


class SkillConfig(BaseModel):
    """Main joke skill configuration."""

    version: str = Field(default="1.0", pattern=r"^\d+\.\d+$")
    skill: SkillSection = Field(default_factory=SkillSection)
    timing: TimingConfig = Field(default_factory=TimingConfig)
    ambient: AmbientConfig = Field(default_factory=AmbientConfig)
    content: ContentConfig = Field(default_factory=ContentConfig)
    volumes: VolumeConfig = Field(default_factory=VolumeConfig)
    colors: ColorConfig = Field(default_factory=ColorConfig)
    behavior: BehaviorConfig = Field(default_factory=BehaviorConfig)

    @classmethod
    def from_yaml(cls, path: Path) -> SkillConfig:
        """Load configuration from a YAML file.

        Raises:
            FileNotFoundError: If the config file doesn't exist.
            yaml.YAMLError: If the YAML is malformed.
            pydantic.ValidationError: If validation fails.
        """
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        return cls.model_validate(data)


class EnvSettings(BaseSettings):
    """Environment overrides, read from ``JOKE_SKILL_*`` variables."""

    model_config = SettingsConfigDict(
        env_prefix="JOKE_SKILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(default=False, description="Enable debug logging")
    log_json: bool = Field(default=False, description="Render logs as JSON")
    config_path: Path | None = Field(default=None)


def load_config(
    config_path: Path | None = None,
    default_paths: list[Path] | None = None,
) -> SkillConfig:
    """Load configuration from file or use defaults.

    Search order:
    1. Explicit config_path if provided
    2. Default paths in order: ./config/default.yaml, ~/.joke_skill/config.yaml
    3. Built-in defaults if no file found
    """
    if default_paths is None:
        default_paths = [
            Path("config/default.yaml"),
            Path.home() / ".joke_skill" / "config.yaml",
        ]

    if config_path is not None:
        return SkillConfig.from_yaml(config_path)

    for path in default_paths:
        if path.exists():
            return SkillConfig.from_yaml(path)

    return SkillConfig()


def get_env_settings() -> EnvSettings:
    """Load environment settings."""
    return EnvSettings()
