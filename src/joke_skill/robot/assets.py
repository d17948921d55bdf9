"""Catalog of the audio clips and images stored on the robot."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from joke_skill.robot.protocol import RobotMessenger
from joke_skill.robot.types import AudioDetails, ImageDetails
from joke_skill.utils.logging import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class AssetCatalog:
    """Read-only view of the assets available for one session.

    Only used for existence checks: a clip that is not on the robot is
    swapped for the fallback clip instead of being played blind.
    """

    audio: frozenset[str] = field(default_factory=frozenset)
    images: frozenset[str] = field(default_factory=frozenset)
    fallback_clip: str = "s_Awe.wav"

    @classmethod
    def from_details(
        cls,
        audio: Iterable[AudioDetails] | None,
        images: Iterable[ImageDetails] | None,
        fallback_clip: str = "s_Awe.wav",
    ) -> AssetCatalog:
        """Build a catalog from messenger listings (``None`` means empty)."""
        return cls(
            audio=frozenset(item.name for item in audio or ()),
            images=frozenset(item.name for item in images or ()),
            fallback_clip=fallback_clip,
        )

    @classmethod
    async def fetch(
        cls, robot: RobotMessenger, fallback_clip: str = "s_Awe.wav"
    ) -> AssetCatalog:
        """Request both listings from the robot."""
        audio = await robot.get_audio_list()
        images = await robot.get_image_list()
        catalog = cls.from_details(audio, images, fallback_clip)
        log.info(
            "asset_catalog_loaded",
            audio_count=len(catalog.audio),
            image_count=len(catalog.images),
        )
        return catalog

    def has_audio(self, name: str) -> bool:
        return name in self.audio

    def has_image(self, name: str) -> bool:
        return name in self.images

    def resolve_audio(self, name: str) -> str:
        """Return ``name`` if the robot has it, else the fallback clip."""
        if self.has_audio(name):
            return name
        log.debug("audio_fallback", requested=name, fallback=self.fallback_clip)
        return self.fallback_clip
