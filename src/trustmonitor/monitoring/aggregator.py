"""
Latency and throughput aggregation.

Recomputes statistics from the sample window on every ingestion event and
smooths throughput with an exponentially weighted moving average.
"""

import math
from dataclasses import replace

import numpy as np

from .sample_window import SampleWindow
from .stats import LatencyStats, ThroughputStats


def percentile(sorted_values: np.ndarray, fraction: float) -> float:
    """
    Nearest-rank percentile over an ascending array.

    index = ceil(n * fraction) - 1, clamped to >= 0 (no interpolation).

    Args:
        sorted_values: Ascending, non-empty array
        fraction: Percentile as a fraction (0.95 for p95)

    Returns:
        Sample at the nearest-rank index
    """
    index = math.ceil(len(sorted_values) * fraction) - 1
    return float(sorted_values[max(0, index)])


def ewma(current: float, new_value: float, alpha: float) -> float:
    """Blend a new observation into a smoothed value with weight alpha."""
    return alpha * new_value + (1 - alpha) * current


class MetricsAggregator:
    """
    Stateless recomputation of latency and throughput statistics.

    Architecture:
    - Full recompute over the window on each call (O(n log n), n <= capacity)
    - Lifetime min/max folded with the sorted window extremes
    - Throughput from a trailing sub-window over a fixed conceptual interval
    """

    EWMA_ALPHA = 0.1
    THROUGHPUT_SAMPLE_COUNT = 100  # Trailing samples used for the rate tick
    THROUGHPUT_WINDOW_MS = 5000  # Conceptual interval the tick spans

    def __init__(
        self,
        alpha: float = EWMA_ALPHA,
        throughput_sample_count: int = THROUGHPUT_SAMPLE_COUNT,
        throughput_window_ms: float = THROUGHPUT_WINDOW_MS,
    ):
        """
        Initialize aggregator.

        Args:
            alpha: EWMA smoothing factor in (0, 1]
            throughput_sample_count: Trailing samples considered per tick
            throughput_window_ms: Interval those samples are assumed to span
        """
        self.alpha = alpha
        self.throughput_sample_count = throughput_sample_count
        self.throughput_window_ms = throughput_window_ms

    def compute_latency(self, previous: LatencyStats, window: SampleWindow) -> LatencyStats:
        """
        Recompute latency statistics from the whole window.

        Args:
            previous: Current latency stats (source of lifetime min/max)
            window: Sample window, already holding the new sample

        Returns:
            New LatencyStats, or `previous` when the window is empty
        """
        if len(window) == 0:
            return previous

        samples = np.sort(window.values())

        return LatencyStats(
            min=min(previous.min, float(samples[0])),
            max=max(previous.max, float(samples[-1])),
            avg=float(samples.mean()),
            p95=percentile(samples, 0.95),
            p99=percentile(samples, 0.99),
        )

    def compute_throughput_tick(
        self, previous: ThroughputStats, window: SampleWindow
    ) -> ThroughputStats:
        """
        Fold the trailing-window rate into verifications_per_second.

        Fewer than 2 trailing samples leaves throughput unchanged.

        Args:
            previous: Current throughput stats
            window: Sample window

        Returns:
            Updated ThroughputStats
        """
        recent_count = len(window.recent(self.throughput_sample_count))
        if recent_count < 2:
            return previous

        rate = recent_count / (self.throughput_window_ms / 1000)
        return replace(
            previous,
            verifications_per_second=ewma(
                previous.verifications_per_second, rate, self.alpha
            ),
            peak_throughput=max(previous.peak_throughput, rate),
        )

    def fold_batch(
        self, previous: ThroughputStats, batch_size: int, duration_ms: float
    ) -> ThroughputStats:
        """
        Fold one batch observation into the throughput stats.

        Args:
            previous: Current throughput stats
            batch_size: Verifications in the batch
            duration_ms: Wall time of the batch (must be > 0)

        Returns:
            Updated ThroughputStats
        """
        seconds = duration_ms / 1000
        verifications_per_second = batch_size / seconds
        batches_per_second = 1 / seconds

        return ThroughputStats(
            verifications_per_second=ewma(
                previous.verifications_per_second, verifications_per_second, self.alpha
            ),
            batches_per_second=ewma(
                previous.batches_per_second, batches_per_second, self.alpha
            ),
            peak_throughput=max(previous.peak_throughput, verifications_per_second),
        )
