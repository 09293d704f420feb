"""Logging configuration for term-highlight.

The package disables its own loguru output on import so that embedding
applications stay quiet; front ends call :func:`configure_logging` to opt in.
"""

import sys

from loguru import logger

PACKAGE = "term_highlight"


def configure_logging(*, verbose: bool = False) -> None:
    """Route package logs to stderr at INFO, or DEBUG when verbose."""
    logger.remove()
    logger.enable(PACKAGE)
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")
