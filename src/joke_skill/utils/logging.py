"""Structured logging for the joke skill.

All modules log through structlog. Console rendering is used while
developing against the mock robot; JSON is meant for the skill host,
which collects one log stream per skill run.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog
from structlog.types import Processor

# Host log levels mapped onto stdlib levels. "verbose" is what the
# robot's skill logger calls its most detailed level.
_LEVEL_ALIASES = {
    "VERBOSE": "DEBUG",
    "WARN": "WARNING",
}


def _resolve_level(level: str) -> int:
    name = level.upper()
    name = _LEVEL_ALIASES.get(name, name)
    return getattr(logging, name)


def configure_logging(
    level: str = "INFO",
    json_format: bool = False,
    log_file: Path | None = None,
) -> None:
    """Configure structured logging for a skill run.

    Args:
        level: Log level (VERBOSE, DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: Render JSON lines instead of colored console output.
        log_file: Optional path of a JSON log file for the run.
    """
    numeric_level = _resolve_level(level)
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=numeric_level,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(colors=True),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=structlog.processors.JSONRenderer(),
                foreign_pre_chain=shared_processors,
            )
        )
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("joke_started", joke_index=2)
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Attach key/value pairs to every log line of the current run.

    The runner binds the skill name and session id here so that lines
    from timer callbacks can be told apart across runs.
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with :func:`bind_context`."""
    structlog.contextvars.clear_contextvars()
