"""Logging configuration for the application."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from .enums import Environment


def setup_logging(environment: Environment, level: Optional[str] = None) -> None:
    """Configure application-wide logging.

    Level defaults to DEBUG in development and INFO elsewhere; LOG_LEVEL
    overrides it. Output goes to stdout.
    """
    if level:
        log_level = logging.getLevelName(level.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown LOG_LEVEL: {level!r}")
    else:
        log_level = logging.DEBUG if environment is Environment.DEVELOPMENT else logging.INFO

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger(__name__).info(
        "Logging initialized. Mode: [%s], Level: [%s]", environment.value, logging.getLevelName(log_level)
    )
