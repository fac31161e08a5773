"""
Decorators and context managers that feed timings into a PerformanceMonitor.

The block or call is timed with time.perf_counter; it counts as successful
when it returns without raising. Exceptions always propagate.
"""

import time
from functools import wraps
from typing import Callable, TypeVar

from .performance_monitor import PerformanceMonitor

T = TypeVar("T")

VERIFICATION = "verification"
CRYPTOGRAPHIC = "cryptographic"


def _recorder(monitor: PerformanceMonitor, kind: str) -> Callable[[float, bool], None]:
    if kind == VERIFICATION:
        return monitor.record_verification
    if kind == CRYPTOGRAPHIC:
        return monitor.record_cryptographic_operation
    raise ValueError(f"kind must be '{VERIFICATION}' or '{CRYPTOGRAPHIC}', got {kind!r}")


def _elapsed_ms(start: float) -> float:
    return (time.perf_counter() - start) * 1000


class measure:
    """
    Context manager for measuring a verification block.

    Usage:
        with measure(monitor):
            result = engine.verify(decision)

        with measure(monitor, kind="cryptographic"):
            signature = signer.sign(payload)
    """

    __slots__ = ("_record", "start", "duration_ms")

    def __init__(self, monitor: PerformanceMonitor, kind: str = VERIFICATION):
        self._record = _recorder(monitor, kind)
        self.start = 0.0
        self.duration_ms = 0.0

    def __enter__(self):
        """Record start time."""
        self.start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Record duration and outcome."""
        self.duration_ms = _elapsed_ms(self.start)
        self._record(self.duration_ms, exc_type is None)
        return False  # Don't suppress exceptions


def measure_sync(monitor: PerformanceMonitor, kind: str = VERIFICATION):
    """
    Decorator for measuring sync function latency.

    Usage:
        @measure_sync(monitor)
        def verify(decision):
            ...
    """
    record = _recorder(monitor, kind)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            success = False
            try:
                result = func(*args, **kwargs)
                success = True
                return result
            finally:
                record(_elapsed_ms(start), success)

        return wrapper

    return decorator


def measure_async(monitor: PerformanceMonitor, kind: str = VERIFICATION):
    """
    Decorator for measuring async function latency.

    Usage:
        @measure_async(monitor, kind="cryptographic")
        async def verify_signature(payload):
            ...
    """
    record = _recorder(monitor, kind)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            start = time.perf_counter()
            success = False
            try:
                result = await func(*args, **kwargs)
                success = True
                return result
            finally:
                record(_elapsed_ms(start), success)

        return wrapper

    return decorator
