"""
Logging helpers for globscope.

Log records go to stderr through rich so they never mix with search
results printed on stdout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


def level_for(verbosity: int) -> int:
    """
    Map a ``-v`` count to a logging level.

    0 -> WARNING, 1 -> INFO, 2 or more -> DEBUG
    """

    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int) -> None:
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=verbosity >= 2,
    )
    logging.basicConfig(
        level=level_for(verbosity),
        format="%(name)s: %(message)s",
        handlers=[handler],
    )
