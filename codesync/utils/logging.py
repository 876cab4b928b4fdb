from loguru import logger
import time
from functools import wraps

def timeit(func):
    """
    Decorator that logs the execution time of the decorated function.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__qualname__} executed in {elapsed:.6f}s")
    return wrapper


def atimeit(func):
    """
    Async variant of ``timeit``.
    """
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - start
            logger.debug(f"{func.__qualname__} executed in {elapsed:.6f}s")
    return wrapper
