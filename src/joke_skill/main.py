"""Joke skill - Main entry point.

Run with: joke-skill (after installation)

Commands:
- run: Run one skill session against the mock robot
- config: Show the effective configuration
- version: Show version info
"""

from __future__ import annotations

import asyncio
import itertools
import random
import signal
from pathlib import Path
from typing import Any

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from joke_skill.behaviors.coordinator import TellingJokeSkill
from joke_skill.errors import ErrorCode, ErrorResponse
from joke_skill.robot.mock import MockRobot
from joke_skill.runner import RunResult, SkillRunner
from joke_skill.utils.config import SkillConfig, get_env_settings, load_config
from joke_skill.utils.logging import configure_logging, get_logger

app = typer.Typer(
    name="joke-skill",
    help="Telling-joke skill for a social robot",
)

log = get_logger(__name__)


def print_error(error: ErrorResponse) -> None:
    """Print a structured error as JSON on stderr."""
    Console(stderr=True).print_json(data=error.to_dict())


def load_config_or_exit(config_path: Path | None) -> SkillConfig:
    """Load configuration, exiting with status 2 if it is unusable."""
    try:
        return load_config(config_path)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        print_error(ErrorResponse.from_exception(e, ErrorCode.CONFIGURATION_ERROR))
        raise typer.Exit(code=2) from e


def setup_signal_handlers(loop: asyncio.AbstractEventLoop, runner: SkillRunner) -> None:
    """Cancel the skill on SIGINT/SIGTERM instead of killing the loop."""

    def shutdown_handler() -> None:
        log.info("Received shutdown signal")
        runner.request_stop()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, shutdown_handler)


async def simulate_faces(robot: MockRobot, labels: list[str], every_seconds: float) -> None:
    """Show the mock robot a face every ``every_seconds``, cycling labels."""
    for label in itertools.cycle(labels):
        await asyncio.sleep(every_seconds)
        delivered = await robot.emit_face(label)
        log.debug("Simulated face", label=label, delivered=delivered)


async def async_main(
    config: SkillConfig,
    duration: float | None = None,
    faces: list[str] | None = None,
    face_every: float = 20.0,
    playback_seconds: float = 2.0,
    seed: int | None = None,
) -> RunResult:
    """Run one session against the mock robot."""
    robot = MockRobot(playback_seconds=playback_seconds)
    skill = TellingJokeSkill(robot, config, rng=random.Random(seed))
    runner = SkillRunner(skill, timeout_seconds=duration)
    setup_signal_handlers(asyncio.get_running_loop(), runner)

    face_task: asyncio.Task[Any] | None = None
    if faces:
        face_task = asyncio.create_task(simulate_faces(robot, faces, face_every))

    try:
        return await runner.run()
    finally:
        if face_task is not None:
            face_task.cancel()
            try:
                await face_task
            except asyncio.CancelledError:
                pass
        await robot.close()


@app.command()
def run(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    duration: float | None = typer.Option(
        None,
        "--duration",
        "-d",
        help="Seconds before the session times out (default: skill timeout)",
    ),
    face: list[str] = typer.Option(
        [],
        "--face",
        "-f",
        help="Face label to show the robot periodically (repeatable)",
    ),
    face_every: float = typer.Option(
        20.0,
        "--face-every",
        help="Seconds between simulated faces",
    ),
    seed: int | None = typer.Option(
        None,
        "--seed",
        help="Random seed for clip and motion choices",
    ),
) -> None:
    """Run a skill session against the mock robot.

    Press Ctrl+C to cancel the skill.
    """
    env = get_env_settings()
    cfg = load_config_or_exit(config or env.config_path)
    configure_logging(
        level="DEBUG" if env.debug else cfg.skill.log_level,
        json_format=env.log_json,
    )

    result = asyncio.run(
        async_main(
            cfg,
            duration=duration,
            faces=face,
            face_every=face_every,
            seed=seed,
        )
    )

    console = Console()
    console.print(
        f"[cyan]Session {result.session_id}[/cyan] "
        f"{result.outcome.value} after {result.duration_seconds:.1f}s"
    )
    if result.last_error is not None:
        print_error(result.last_error)
        raise typer.Exit(code=1)


@app.command(name="config")
def show_config(
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
) -> None:
    """Show the effective configuration."""
    cfg = load_config_or_exit(config)

    table = Table(title=f"{cfg.skill.name} configuration", show_header=True)
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")

    for section, values in cfg.model_dump(mode="json").items():
        if not isinstance(values, dict):
            table.add_row(section, str(values))
            continue
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))

    Console().print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from joke_skill import __version__

    print(f"Joke skill v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
