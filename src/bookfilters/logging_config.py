"""Logging configuration for the book filters."""

import sys

from loguru import logger


def configure_logging(*, verbose: bool = False, name: str = "bookfilters") -> None:
    """Send loguru output to stderr, tagged with the filter name.

    Stdout carries the document back to pandoc, and pandoc interleaves the
    stderr of every filter it runs, hence the tag.
    """
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(sys.stderr, level=level, format="{level.icon} " + name + ": {message}")
