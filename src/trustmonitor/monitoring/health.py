"""
Threshold-based health classification.

Pure functions over aggregate metrics; the tri-state verdict and the boolean
healthy gate are evaluated independently and need not agree.
"""

from typing import Optional

from trustmonitor.config.thresholds import HealthThresholds

from .stats import ErrorCounts, HealthStatus

DEFAULT_THRESHOLDS = HealthThresholds()


def error_rate(errors: ErrorCounts, sample_count: int) -> float:
    """
    Window-relative error rate.

    Args:
        errors: Current error counters
        sample_count: Latency samples currently in the window

    Returns:
        total_errors / (sample_count + total_errors), 0.0 with no operations
    """
    total_errors = errors.total
    total_operations = sample_count + total_errors
    return total_errors / total_operations if total_operations > 0 else 0.0


def classify_health(
    avg_latency: float,
    rate: float,
    thresholds: Optional[HealthThresholds] = None,
) -> HealthStatus:
    """
    Derive the health verdict.

    Args:
        avg_latency: Window mean latency (ms)
        rate: Error rate in [0, 1]
        thresholds: Threshold set (defaults: 50/100 ms, 5%/10%)

    Returns:
        CRITICAL, WARNING or HEALTHY
    """
    t = thresholds or DEFAULT_THRESHOLDS

    if avg_latency > t.critical_latency_ms or rate > t.critical_error_rate:
        return HealthStatus.CRITICAL

    if avg_latency > t.warning_latency_ms or rate > t.warning_error_rate:
        return HealthStatus.WARNING

    return HealthStatus.HEALTHY


def is_performance_healthy(
    avg_latency: float,
    rate: float,
    heap_used: int,
    thresholds: Optional[HealthThresholds] = None,
) -> bool:
    """
    Strict healthy gate: latency, error rate and heap all under the warning bounds.

    Args:
        avg_latency: Window mean latency (ms)
        rate: Error rate in [0, 1]
        heap_used: Heap bytes from the latest memory snapshot
        thresholds: Threshold set (defaults: 50 ms, 5%, 100 MiB)
    """
    t = thresholds or DEFAULT_THRESHOLDS
    return (
        avg_latency < t.warning_latency_ms
        and rate < t.warning_error_rate
        and heap_used < t.max_heap_bytes
    )
