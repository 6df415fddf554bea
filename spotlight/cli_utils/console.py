"""
gnome-spotlight console utilities

This module provides application-wide access to Rich Console objects for writing to
stdout and stderr, and sets up logging so that log records are rendered by Rich on
stderr as well.
"""

import logging
from io import StringIO

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

spotlight_theme = Theme({"fail": "bold red", "confirm": "bold", "describe": ""})

console = Console(theme=spotlight_theme)
error_console = Console(theme=spotlight_theme, stderr=True)

LOGGER_NAME = "spotlight"


def setup_logging(debug: bool = False, quiet: bool = False) -> logging.Logger:
    """
    Configure and return the application logger. Called exactly once, by the CLI.

    debug wins over quiet. In quiet mode the regular console output is also silenced by
    pointing it at a junk stream, errors still reach stderr.
    """

    level = logging.INFO
    # None makes the console follow whatever sys.stdout currently is
    console.file = None
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
        console.file = StringIO()

    handler = RichHandler(console=error_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.propagate = False

    return logger


"""
Formatting helpers
"""


def describe(msg: str, **kwargs):
    """
    Format descriptive msg and print to stdout.
    """

    console.print(f"{msg}", style="describe", **kwargs)


def confirm_success(msg: str, **kwargs):
    """
    Format confirmation msg and print to stdout. Accept any additional kwargs that
    console.print from the rich module exposes.
    """

    console.print(f":white_check_mark-emoji: {msg}", style="confirm", **kwargs)


def fail(msg: str):
    """
    Format failure msg and print to stderr.
    """

    error_console.print(f":x-emoji: failed. {msg}", style="fail", markup=False)
