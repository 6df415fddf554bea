"""
gnome-spotlight Decorators
"""

from sys import exit
from functools import wraps

from spotlight.errors import SpotlightError
from spotlight.cli_utils.console import fail


def catch_errors(func):
    """
    Catch and format errors with the "fail" console template and gracefully
    exit the application with an error code.

    Errors raised by the pipeline name the stage they happened in, which is
    prepended to the message.
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)

        except SpotlightError as error:
            fail(f"{error.stage}: {error}" if error.stage else str(error))
            exit(1)

        except Exception as error:
            fail(f"something unexpected happened: {error!r}")
            exit(1)

    return wrapper
