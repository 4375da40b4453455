"""
Logging helpers for gerrit-cli.

Configuration is a single verbosity level; user-facing output is
printed directly and does not go through logging.
"""

from __future__ import annotations

import logging


def verbosity_to_level(verbosity: int) -> int:
    """
    Map a verbosity count to a logging level.

    verbosity == 0 -> WARNING
    verbosity == 1 -> INFO
    verbosity >= 2 -> DEBUG
    """

    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int) -> None:
    logging.basicConfig(
        level=verbosity_to_level(verbosity),
        format="%(levelname)s %(name)s: %(message)s",
    )
