import functools
import logging
import time
import warnings
from typing import Callable

from cachetools.func import ttl_cache

logger = logging.getLogger("animeweb.performance")


def time_it(func):
    """Decorator to measure execution time of async functions"""

    @functools.wraps(func)
    async def async_wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            execution_time = time.perf_counter() - start_time
            logger.debug(f"{func.__name__} completed in {execution_time:.3f} seconds")

    return async_wrapper


def setup_logs(level: int = logging.DEBUG):
    warnings.simplefilter("default")
    logging.getLogger("animeweb").setLevel(level)
    logging.basicConfig()


loggers: dict[int, Callable] = {}


def ratelimited_log(logger_method: Callable, message: str, delay: int = 60):
    """Emit the same message at most once per ``delay`` seconds.

    The message is the cache key, so keep it free of per-call details.
    """
    if delay not in loggers:

        @ttl_cache(ttl=delay)
        def call(logger_method, message):
            logger_method(message)

        loggers[delay] = call

    return loggers[delay](logger_method, message)
