"""Logging helpers for the solver."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "MINPRESS_LOG_LEVEL"


def resolve_level(level: str | int | None = None) -> int:
    """Level from the argument, then ``MINPRESS_LOG_LEVEL``, then INFO."""
    if level is None:
        level = os.getenv(LOG_LEVEL_ENV) or logging.INFO
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level {level!r}")
    return resolved


def configure_logging(level: str | int | None = None) -> None:
    """Configure default logging if no handlers are present."""
    root = logging.getLogger()
    if root.handlers:
        return
    logging.basicConfig(
        level=resolve_level(level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler()],
    )
