"""Logging setup for statusflow."""

import logging
import sys

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = "WARNING", log_format: str | None = None) -> logging.Logger:
    """Configure the ``statusflow`` logger.

    Log records go to stderr so that command output on stdout stays clean.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR).
        log_format: Custom log format string.

    Returns:
        The package logger.
    """
    formatter = logging.Formatter(
        fmt=log_format or DEFAULT_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    logger = logging.getLogger("statusflow")
    logger.setLevel(getattr(logging, level.upper()))

    # Remove handlers from a previous call
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger
