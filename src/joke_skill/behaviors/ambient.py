"""Ambient fidgeting: random head, arm and LED commands.

Each timer tick issues one command with values drawn uniformly from the
configured half-open integer ranges. The ticks ignore the session state,
so the robot keeps fidgeting while it tells jokes or greets someone.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from joke_skill.robot.types import AngularUnit
from joke_skill.utils.config import AmbientConfig, Range

if TYPE_CHECKING:
    from joke_skill.robot.protocol import RobotMessenger


@dataclass(frozen=True)
class HeadTarget:
    """Random head pose, in degrees."""

    pitch: int
    roll: int
    yaw: int
    velocity: int


@dataclass(frozen=True)
class ArmTarget:
    """Random arm positions, in degrees."""

    left_position: int
    right_position: int
    left_velocity: int
    right_velocity: int


@dataclass(frozen=True)
class LedColor:
    red: int
    green: int
    blue: int


class AmbientMotion:
    """Generates and sends the fidget commands.

    Example usage:
        ambient = AmbientMotion(robot, config.ambient, random.Random(7))
        await ambient.move_head()
    """

    def __init__(
        self,
        robot: RobotMessenger,
        ranges: AmbientConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.robot = robot
        self.ranges = ranges or AmbientConfig()
        self.rng = rng or random.Random()

    def _draw(self, bounds: Range) -> int:
        return self.rng.randrange(*bounds)

    def head_target(self) -> HeadTarget:
        return HeadTarget(
            pitch=self._draw(self.ranges.head_pitch),
            roll=self._draw(self.ranges.head_roll),
            yaw=self._draw(self.ranges.head_yaw),
            velocity=self._draw(self.ranges.head_velocity),
        )

    def arm_target(self) -> ArmTarget:
        return ArmTarget(
            left_position=self._draw(self.ranges.arm_position),
            right_position=self._draw(self.ranges.arm_position),
            left_velocity=self._draw(self.ranges.arm_velocity),
            right_velocity=self._draw(self.ranges.arm_velocity),
        )

    def led_color(self) -> LedColor:
        return LedColor(
            red=self._draw(self.ranges.led_channel),
            green=self._draw(self.ranges.led_channel),
            blue=self._draw(self.ranges.led_channel),
        )

    async def move_head(self) -> None:
        """Head timer tick."""
        target = self.head_target()
        await self.robot.move_head(
            target.pitch,
            target.roll,
            target.yaw,
            target.velocity,
            AngularUnit.DEGREES,
        )

    async def move_arms(self) -> None:
        """Arm timer tick."""
        target = self.arm_target()
        await self.robot.move_arms(
            target.left_position,
            target.right_position,
            target.left_velocity,
            target.right_velocity,
            AngularUnit.DEGREES,
        )

    async def change_led(self) -> None:
        """LED timer tick."""
        color = self.led_color()
        await self.robot.change_led(color.red, color.green, color.blue)
