"""Tests for ambient fidget motion."""

import random

import pytest

from joke_skill.behaviors.ambient import AmbientMotion
from joke_skill.robot.mock import MockRobot
from joke_skill.robot.types import AngularUnit
from joke_skill.utils.config import AmbientConfig


@pytest.fixture
def ambient() -> AmbientMotion:
    return AmbientMotion(MockRobot(), AmbientConfig(), random.Random(42))


class TestRandomTargets:
    """Every drawn value stays inside its half-open range."""

    def test_head_targets_in_range(self, ambient: AmbientMotion) -> None:
        for _ in range(500):
            target = ambient.head_target()
            assert -20 <= target.pitch < 15
            assert -30 <= target.roll < 30
            assert -60 <= target.yaw < 60
            assert 10 <= target.velocity < 75

    def test_arm_targets_in_range(self, ambient: AmbientMotion) -> None:
        for _ in range(500):
            target = ambient.arm_target()
            assert -90 <= target.left_position < 90
            assert -90 <= target.right_position < 90
            assert 10 <= target.left_velocity < 90
            assert 10 <= target.right_velocity < 90

    def test_led_colors_in_range(self, ambient: AmbientMotion) -> None:
        colors = [ambient.led_color() for _ in range(500)]
        for color in colors:
            assert 0 <= color.red <= 255
            assert 0 <= color.green <= 255
            assert 0 <= color.blue <= 255
        assert len({c.red for c in colors}) > 1

    def test_custom_ranges(self) -> None:
        ranges = AmbientConfig(head_yaw=(5, 6))
        ambient = AmbientMotion(MockRobot(), ranges, random.Random(0))
        assert {ambient.head_target().yaw for _ in range(20)} == {5}

    def test_seeded_draws_repeat(self) -> None:
        first = AmbientMotion(MockRobot(), rng=random.Random(7))
        second = AmbientMotion(MockRobot(), rng=random.Random(7))
        assert first.head_target() == second.head_target()


class TestTicks:
    @pytest.mark.asyncio
    async def test_move_head_sends_degrees(self) -> None:
        robot = MockRobot()
        await AmbientMotion(robot, rng=random.Random(1)).move_head()

        (command,) = robot.commands_named("move_head")
        assert command.args["unit"] == AngularUnit.DEGREES
        assert -60 <= command.args["yaw"] < 60

    @pytest.mark.asyncio
    async def test_move_arms(self) -> None:
        robot = MockRobot()
        await AmbientMotion(robot, rng=random.Random(1)).move_arms()

        (command,) = robot.commands_named("move_arms")
        assert command.args["unit"] == AngularUnit.DEGREES
        assert 10 <= command.args["left_velocity"] < 90

    @pytest.mark.asyncio
    async def test_change_led(self) -> None:
        robot = MockRobot()
        await AmbientMotion(robot, rng=random.Random(1)).change_led()

        (command,) = robot.commands_named("change_led")
        assert robot.state.led == (
            command.args["red"],
            command.args["green"],
            command.args["blue"],
        )
