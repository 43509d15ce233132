"""
splashy console utilities

This module provides library-wide access to a Rich Console object for writing log output to
stderr. splashy is a library, so nothing is printed unless the application asks for it: the
"splashy" logger carries only a NullHandler until enable_logging() is called.

    >>> from splashy.console import enable_logging
    >>> enable_logging("DEBUG")
"""

import logging
from typing import Union

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

splashy_theme = Theme(
    {
        "logging.level.warning": "orange_red1",
        "logging.level.error": "bold red",
    }
)

error_console = Console(theme=splashy_theme, stderr=True)

logger = logging.getLogger("splashy")
logger.addHandler(logging.NullHandler())


def enable_logging(level: Union[int, str] = logging.INFO) -> logging.Handler:
    """
    Attach a RichHandler writing to stderr to the "splashy" logger and set its level. Calling
    this more than once replaces the previous handler instead of stacking them.
    """

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=error_console, markup=False, show_path=False)
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler


def disable_logging():
    """Remove any RichHandler previously attached with enable_logging."""

    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
