"""
Stage timing for debugging.

Timings are logged at DEBUG level while BZ_DEBUG=1. The flag is read on every
call so that ``--debug`` takes effect after the pipeline modules are imported.
"""

import functools
import logging
import time
from contextlib import contextmanager
from typing import Callable, Iterator, ParamSpec, TypeVar

from .config import config

P = ParamSpec("P")
R = TypeVar("R")

logger = logging.getLogger(__name__)


@contextmanager
def timed_stage(name: str) -> Iterator[None]:
    """Log how long the enclosed block took, when debug timing is on."""
    if not config.debug:
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        logger.debug("[BZ_DEBUG] %s: %.2fms", name, (time.perf_counter() - start) * 1000)


def timer(func: Callable[P, R]) -> Callable[P, R]:
    """
    Decorator that times every call of ``func`` as a stage named after it.

    Args:
        func: Function to measure

    Returns:
        Wrapped function
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        with timed_stage(func.__name__):
            return func(*args, **kwargs)

    return wrapper
