"""
Performance monitoring for the verification pipeline.

Usage:
    from trustmonitor.monitoring import PerformanceMonitor, measure

    monitor = PerformanceMonitor()

    # Instrument code
    with measure(monitor):
        result = engine.verify(decision)

    monitor.record_batch(batch_size=100, duration=1000.0, successes=98)

    # Query statistics
    summary = monitor.get_summary()
    print(f"avg={summary.average_latency:.2f}ms status={summary.status.value}")
"""

from .aggregator import MetricsAggregator, ewma, percentile
from .health import classify_health, error_rate, is_performance_healthy
from .instrumentation import measure, measure_async, measure_sync
from .memory import read_process_memory
from .performance_monitor import (
    PerformanceMonitor,
    get_default_monitor,
    reset_default_monitor,
)
from .sample_window import SampleWindow
from .stats import (
    ErrorCategory,
    ErrorCounts,
    HealthStatus,
    LatencyStats,
    MemoryUsage,
    MetricsSnapshot,
    PerformanceSummary,
    ThroughputStats,
)

__all__ = [
    "PerformanceMonitor",
    "get_default_monitor",
    "reset_default_monitor",
    "measure",
    "measure_async",
    "measure_sync",
    "MetricsAggregator",
    "ewma",
    "percentile",
    "SampleWindow",
    "classify_health",
    "error_rate",
    "is_performance_healthy",
    "read_process_memory",
    "ErrorCategory",
    "ErrorCounts",
    "HealthStatus",
    "LatencyStats",
    "MemoryUsage",
    "MetricsSnapshot",
    "PerformanceSummary",
    "ThroughputStats",
]
