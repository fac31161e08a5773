"""
Bounded FIFO window of latency samples.

Pre-allocated numpy storage with wrap-around writes; the oldest sample is
overwritten once the window is full.
"""

import numpy as np


class SampleWindow:
    """
    Rolling window of the most recent latency samples (milliseconds).

    Architecture:
    - Pre-allocated float64 array (no allocation on append)
    - Write index advances monotonically, slot = index % capacity
    - Insertion order is reconstructed on read

    Performance characteristics:
    - append: O(1)
    - values / recent: O(n) copy, n <= capacity

    Thread safety:
    - NOT thread-safe on its own; PerformanceMonitor serializes access
    """

    DEFAULT_CAPACITY = 1000

    def __init__(self, capacity: int = DEFAULT_CAPACITY):
        """
        Initialize window with pre-allocated storage.

        Args:
            capacity: Maximum number of retained samples

        Raises:
            ValueError: If capacity is not positive
        """
        if capacity < 1:
            raise ValueError(f"Window capacity must be positive, got {capacity}")

        self._capacity = capacity
        self._buffer = np.zeros(capacity, dtype=np.float64)

        # Total samples ever appended since last clear
        self._write_idx = 0

        # Samples dropped by FIFO eviction, for diagnostics
        self._evicted_count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def evicted_count(self) -> int:
        """Number of samples discarded because the window was full."""
        return self._evicted_count

    def __len__(self) -> int:
        return min(self._write_idx, self._capacity)

    def append(self, value: float) -> None:
        """
        Append a sample, evicting the oldest when full.

        Args:
            value: Latency in milliseconds
        """
        if self._write_idx >= self._capacity:
            self._evicted_count += 1

        self._buffer[self._write_idx % self._capacity] = value
        self._write_idx += 1

    def values(self) -> np.ndarray:
        """
        Get a copy of all retained samples in insertion order.

        Returns:
            1-D float64 array, oldest first
        """
        if self._write_idx <= self._capacity:
            return self._buffer[: self._write_idx].copy()

        # Full and wrapped: oldest sample sits at the next write slot
        start = self._write_idx % self._capacity
        return np.concatenate((self._buffer[start:], self._buffer[:start]))

    def recent(self, count: int) -> np.ndarray:
        """
        Get the last `count` samples (fewer if not yet available).

        Args:
            count: Maximum number of trailing samples

        Returns:
            1-D float64 array, oldest first
        """
        if count <= 0:
            return np.empty(0, dtype=np.float64)
        return self.values()[-count:]

    def clear(self) -> None:
        """Drop all samples and reset diagnostics."""
        self._buffer.fill(0.0)
        self._write_idx = 0
        self._evicted_count = 0
