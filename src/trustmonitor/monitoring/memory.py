"""
Process memory probe.
"""

from typing import Callable

import psutil

from .stats import MemoryUsage

MemoryProbe = Callable[[], MemoryUsage]


def read_process_memory() -> MemoryUsage:
    """
    Snapshot the current process memory via psutil.

    heap_used/rss map to resident set size, heap_total to virtual size and
    external to shared memory where the platform reports it.
    """
    info = psutil.Process().memory_info()
    return MemoryUsage(
        heap_used=info.rss,
        heap_total=info.vms,
        external=getattr(info, "shared", 0),
        rss=info.rss,
    )
