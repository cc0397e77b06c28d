"""
This module provides decorators for cross-cutting concerns.

Decorators:
-   `ensure_loaded`: Ensures a lazily loaded resource is ready before a method runs.
-   `timing_decorator`: Logs the execution time of a synchronous function.
"""

import time
from collections.abc import Callable
from functools import wraps

from loguru import logger

from module_resolver.core import logs as ls
from module_resolver.data_models.types_defs import LoadableProtocol


def ensure_loaded[T](func: Callable[..., T]) -> Callable[..., T]:
    """
    Decorator to ensure that a resource is loaded before a method is called.

    It expects the class instance (`self`) to have a `_ensure_loaded` method.

    Args:
        func: The function to wrap.

    Returns:
        The wrapped function.
    """

    @wraps(func)
    def wrapper(self: LoadableProtocol, *args, **kwargs) -> T:
        self._ensure_loaded()
        return func(self, *args, **kwargs)

    return wrapper


def timing_decorator[**P, T](func: Callable[P, T]) -> Callable[P, T]:
    """
    Decorator that logs the execution time of a synchronous function.

    Args:
        func: The function to wrap.

    Returns:
        The wrapped function.
    """

    @wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = (time.perf_counter() - start) * 1000
            logger.debug(ls.FUNC_TIMING.format(func=func.__qualname__, time=elapsed))

    return wrapper
