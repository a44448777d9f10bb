"""Logging configuration using rich.

Log records go to stderr through ``RichHandler`` so they never mix with
command output printed on stdout.
"""

import logging
import os
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "GATOR_LOG_LEVEL"


def configure_logging(log_level: Optional[str] = None) -> None:
    """Configure the root logger.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
            Falls back to ``$GATOR_LOG_LEVEL`` and then WARNING.
    """
    level_name = log_level or os.environ.get(LOG_LEVEL_ENV, "WARNING")
    numeric_level = getattr(logging, level_name.upper(), logging.WARNING)

    logging.basicConfig(
        level=numeric_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                show_path=False,
                rich_tracebacks=True,
            )
        ],
        force=True,
    )
