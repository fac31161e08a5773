"""
Real-time performance monitor for the verification pipeline.

Ingests verification, batch, cryptographic and error samples and maintains
windowed latency statistics, smoothed throughput, categorized error counts,
memory footprint and a derived health verdict.
"""

import logging
import math
import threading
import time
from dataclasses import replace
from numbers import Integral
from typing import Callable, Optional

from trustmonitor.config.thresholds import MonitorConfig
from trustmonitor.core.exceptions import InvalidSampleError
from trustmonitor.utils.logger import MonitorLogger, log_execution_time

from .aggregator import MetricsAggregator
from .health import classify_health, error_rate, is_performance_healthy
from .memory import MemoryProbe, read_process_memory
from .sample_window import SampleWindow
from .stats import (
    ErrorCategory,
    HealthStatus,
    MetricsSnapshot,
    PerformanceSummary,
)

logger = logging.getLogger(__name__)


class PerformanceMonitor:
    """
    Statistics aggregation engine with bounded sample retention.

    Architecture:
    - SampleWindow holds the most recent latencies (FIFO, capacity 1000)
    - MetricsAggregator recomputes latency/throughput on every verification
    - Current metrics live in one immutable MetricsSnapshot, swapped on write
    - Memory figures are refreshed only when metrics are read

    Thread safety:
    - One lock serializes append + recompute and guards the snapshot swap
    - Readers always observe a complete snapshot (never torn)
    """

    def __init__(
        self,
        config: Optional[MonitorConfig] = None,
        memory_probe: MemoryProbe = read_process_memory,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize monitor with zeroed state.

        Args:
            config: Window/smoothing/threshold settings (defaults if None)
            memory_probe: Callable returning the current MemoryUsage
            clock: Monotonic clock in seconds, used for uptime
        """
        self._config = config or MonitorConfig()
        self._memory_probe = memory_probe
        self._clock = clock

        self._aggregator = MetricsAggregator(
            alpha=self._config.ewma_alpha,
            throughput_sample_count=self._config.throughput_sample_count,
            throughput_window_ms=self._config.throughput_window_ms,
        )

        self._lock = threading.Lock()
        self._window = SampleWindow(self._config.window_capacity)
        self._metrics = MetricsSnapshot()
        self._start_time = self._clock()
        self._last_status: Optional[HealthStatus] = None

        logger.info(
            f"Performance monitor initialized (window={self._config.window_capacity}, "
            f"alpha={self._config.ewma_alpha})"
        )

    @property
    def config(self) -> MonitorConfig:
        return self._config

    @property
    def sample_count(self) -> int:
        """Latency samples currently held in the window."""
        with self._lock:
            return len(self._window)

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def record_verification(self, duration: float, success: bool) -> None:
        """
        Record a single verification.

        Appends the duration to the window, recomputes latency and
        throughput, and counts a validation error on failure.

        Args:
            duration: Verification time in milliseconds (finite, >= 0)
            success: Whether the verification passed

        Raises:
            InvalidSampleError: If duration is negative or not finite
        """
        duration = _check_duration(duration, "duration")

        with self._lock:
            self._window.append(duration)
            metrics = self._metrics
            latency = self._aggregator.compute_latency(metrics.latency, self._window)
            throughput = self._aggregator.compute_throughput_tick(
                metrics.throughput, self._window
            )
            errors = metrics.errors
            if not success:
                errors = errors.incremented(ErrorCategory.VALIDATION)

            self._metrics = replace(
                metrics, latency=latency, throughput=throughput, errors=errors
            )

    def record_batch(self, batch_size: int, duration: float, successes: int) -> None:
        """
        Record a batch verification.

        Folds verifications/s and batches/s into the EWMA throughput, raises
        the peak if exceeded, and counts failed items as validation errors.

        Args:
            batch_size: Verifications in the batch (>= 1)
            duration: Batch wall time in milliseconds (> 0)
            successes: Passed verifications (0 <= successes <= batch_size)

        Raises:
            InvalidSampleError: If any argument is out of range
        """
        if not isinstance(batch_size, Integral) or isinstance(batch_size, bool) or batch_size < 1:
            raise _invalid_sample(f"batch_size must be a positive integer, got {batch_size!r}")
        duration = _check_duration(duration, "duration")
        if duration == 0:
            raise _invalid_sample("batch duration must be greater than 0")
        if (
            not isinstance(successes, Integral)
            or isinstance(successes, bool)
            or not 0 <= successes <= batch_size
        ):
            raise _invalid_sample(
                f"successes must be an integer in [0, {batch_size}], got {successes!r}"
            )

        with self._lock:
            metrics = self._metrics
            self._metrics = replace(
                metrics,
                throughput=self._aggregator.fold_batch(
                    metrics.throughput, batch_size, duration
                ),
                errors=metrics.errors.incremented(
                    ErrorCategory.VALIDATION, batch_size - successes
                ),
            )

        logger.debug(
            f"Batch recorded: size={batch_size}, duration={duration:.2f}ms, "
            f"failures={batch_size - successes}"
        )

    def record_cryptographic_operation(self, duration: float, success: bool) -> None:
        """
        Record a cryptographic operation.

        The duration is validated but not retained in the latency window.

        Args:
            duration: Operation time in milliseconds (finite, >= 0)
            success: Whether the operation succeeded
        """
        _check_duration(duration, "duration")
        if not success:
            self.record_error(ErrorCategory.CRYPTOGRAPHIC)

    def record_configuration_error(self) -> None:
        self.record_error(ErrorCategory.CONFIGURATION)

    def record_system_error(self) -> None:
        self.record_error(ErrorCategory.SYSTEM)

    def record_error(self, category: ErrorCategory, count: int = 1) -> None:
        """
        Increment an error counter.

        Args:
            category: Error bucket
            count: Non-negative increment

        Raises:
            InvalidSampleError: If count is negative
        """
        if count < 0:
            raise _invalid_sample(f"error count must be non-negative, got {count}")

        with self._lock:
            metrics = self._metrics
            self._metrics = replace(
                metrics, errors=metrics.errors.incremented(category, count)
            )

    # ------------------------------------------------------------------
    # Reporting
    # ------------------------------------------------------------------

    def get_metrics(self) -> MetricsSnapshot:
        """
        Get current metrics with a fresh memory snapshot.

        Returns:
            Immutable MetricsSnapshot
        """
        with log_execution_time("memory probe"):
            memory = self._memory_probe()

        with self._lock:
            self._metrics = replace(self._metrics, memory=memory)
            return self._metrics

    def get_summary(self) -> PerformanceSummary:
        """
        Get derived performance summary.

        Returns:
            PerformanceSummary with uptime, latency, throughput, error rate,
            memory usage and health verdict
        """
        with log_execution_time("memory probe"):
            memory = self._memory_probe()

        # Snapshot, window length and start time read under one lock
        with self._lock:
            self._metrics = replace(self._metrics, memory=memory)
            metrics = self._metrics
            sample_count = len(self._window)
            start_time = self._start_time

        thresholds = self._config.thresholds
        rate = error_rate(metrics.errors, sample_count)
        status = classify_health(metrics.latency.avg, rate, thresholds)

        summary = PerformanceSummary(
            uptime_ms=(self._clock() - start_time) * 1000,
            average_latency=metrics.latency.avg,
            current_throughput=metrics.throughput.verifications_per_second,
            peak_throughput=metrics.throughput.peak_throughput,
            error_rate=rate,
            memory_usage=metrics.memory.heap_used,
            status=status,
        )
        self._track_status(summary)
        return summary

    def is_performance_healthy(self) -> bool:
        """
        Check if performance is within acceptable bounds.

        Returns:
            True iff avg latency < 50ms, error rate < 5% and heap < 100 MiB
            (with default thresholds)
        """
        summary = self.get_summary()
        return is_performance_healthy(
            summary.average_latency,
            summary.error_rate,
            summary.memory_usage,
            self._config.thresholds,
        )

    def reset(self) -> None:
        """Reinitialize counters, clear the window and restart uptime."""
        with self._lock:
            self._metrics = MetricsSnapshot()
            self._window.clear()
            self._start_time = self._clock()
            self._last_status = None

        logger.info("Performance monitor reset")
        MonitorLogger.log_health_event("MONITOR_RESET", {})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _track_status(self, summary: PerformanceSummary) -> None:
        """Emit a health event when the verdict changes."""
        with self._lock:
            previous = self._last_status
            self._last_status = summary.status

        if previous is not None and previous != summary.status:
            logger.warning(
                f"Health status changed: {previous.value} -> {summary.status.value}"
            )
            MonitorLogger.log_health_event(
                "STATUS_CHANGED",
                {
                    "previous": previous.value,
                    "current": summary.status.value,
                    "average_latency_ms": summary.average_latency,
                    "error_rate": summary.error_rate,
                },
            )


def _invalid_sample(message: str) -> InvalidSampleError:
    logger.warning(f"Rejected sample: {message}")
    return InvalidSampleError(message)


def _check_duration(value: float, name: str) -> float:
    """Validate a millisecond duration: finite and non-negative."""
    try:
        duration = float(value)
    except (TypeError, ValueError):
        raise _invalid_sample(f"{name} must be a number, got {value!r}")

    if not math.isfinite(duration) or duration < 0:
        raise _invalid_sample(f"{name} must be finite and >= 0, got {value!r}")
    return duration


_default_monitor: Optional[PerformanceMonitor] = None
_default_lock = threading.Lock()


def get_default_monitor() -> PerformanceMonitor:
    """
    Get the lazily created process-wide monitor.

    Prefer constructing and passing PerformanceMonitor instances explicitly;
    this accessor exists for call sites without a natural owner.
    """
    global _default_monitor
    with _default_lock:
        if _default_monitor is None:
            _default_monitor = PerformanceMonitor()
        return _default_monitor


def reset_default_monitor() -> PerformanceMonitor:
    """Replace the process-wide monitor with a fresh instance."""
    global _default_monitor
    with _default_lock:
        _default_monitor = PerformanceMonitor()
        return _default_monitor
