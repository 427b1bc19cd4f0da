"""Logging setup shared by the CLI and library callers."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

VALID_LOG_LEVELS: dict[str, int] = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def parse_log_level(level: str) -> int:
    """Convert a level name to a logging constant.

    Args:
        level: Level name, case insensitive (debug, info, warning, error, critical)

    Returns:
        The matching logging level

    Raises:
        ValueError: If the level name is unknown
    """
    try:
        return VALID_LOG_LEVELS[level.strip().lower()]
    except KeyError:
        valid = ", ".join(VALID_LOG_LEVELS)
        raise ValueError(f"Invalid log level '{level}'. Choose from: {valid}") from None


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure the root logger for wantarr output on stderr."""
    numeric = parse_log_level(level) if isinstance(level, str) else level
    logging.basicConfig(level=numeric, format=LOG_FORMAT, stream=sys.stderr, force=True)
    logging.getLogger("wantarr").setLevel(numeric)
