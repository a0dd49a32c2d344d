"""Logging setup."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

NOISY_LOGGERS = ("boto3", "botocore", "urllib3", "s3transfer")


def setup_logging(level: str = "WARNING", verbose: bool = False) -> None:
    """Configure root logging to stderr through Rich.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        verbose: Include timestamps and let AWS SDK debug output through
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=verbose,
        rich_tracebacks=True,
    )

    logging.basicConfig(
        level=numeric_level,
        format="%(threadName)s %(message)s" if verbose else "%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    if not verbose:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
