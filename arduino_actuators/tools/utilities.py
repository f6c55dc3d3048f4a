#!/usr/bin/env python3

from typing import Callable
import functools
import logging


def log_exceptions(func: Callable) -> Callable:
    """
    Decorator that logs exceptions with full traceback and re-raises them.

    Example:
    >>> from arduino_actuators.tools import log_exceptions
    >>>
    >>> class Link:
    ...
    ...     @log_exceptions
    ...     def initialize(self):
    ...         ...

    The logger is the one of the module defining the function, so the
    record shows up under the caller's own logger name.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            logger = logging.getLogger(func.__module__)
            logger.error(
                "Exception in %s: %s", func.__qualname__, e,
                exc_info=True
            )
            raise

    return wrapper
