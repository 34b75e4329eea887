"""Logging configuration for the melonhatch command line."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler


__all__ = ["setup_logging"]

PACKAGE_LOGGER = "melonhatch"


def setup_logging(level: int | str = logging.WARNING, console: Console | None = None) -> logging.Logger:
    """
    Route the ``melonhatch`` loggers through a ``RichHandler``.

    Calling this again replaces the handler instead of adding a second one,
    so repeated CLI invocations in one process (tests) do not duplicate
    output.

    Parameters
    ----------
    level : int | str
        Logging level, e.g. ``logging.DEBUG`` or ``"INFO"``.

    console : Console | None
        Console to log to; defaults to stderr.

    Returns
    -------
    logging.Logger
        The package logger.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger
