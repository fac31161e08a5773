"""
Performance statistics data structures.

Immutable snapshot values produced by the monitor: latency distribution,
throughput, categorized error counters, memory footprint and the derived
summary/health verdict.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum


class ErrorCategory(Enum):
    """Fixed set of error buckets tracked by the monitor."""

    VALIDATION = "validation"
    CRYPTOGRAPHIC = "cryptographic"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


class HealthStatus(str, Enum):
    """Tri-state health verdict."""

    HEALTHY = "healthy"
    WARNING = "warning"
    CRITICAL = "critical"


@dataclass(frozen=True, slots=True)
class LatencyStats:
    """
    Latency distribution in milliseconds.

    min/max are lifetime extrema (survive window eviction), avg and the
    percentiles describe the current window only. min stays at +inf until
    the first sample arrives.
    """

    min: float = math.inf
    max: float = 0.0
    avg: float = 0.0
    p95: float = 0.0
    p99: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "min_ms": self.min,
            "max_ms": self.max,
            "avg_ms": self.avg,
            "p95_ms": self.p95,
            "p99_ms": self.p99,
        }


@dataclass(frozen=True, slots=True)
class ThroughputStats:
    """EWMA-smoothed rates plus the running peak rate."""

    verifications_per_second: float = 0.0
    batches_per_second: float = 0.0
    peak_throughput: float = 0.0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "verifications_per_second": self.verifications_per_second,
            "batches_per_second": self.batches_per_second,
            "peak_throughput": self.peak_throughput,
        }


_CATEGORY_FIELDS = {
    ErrorCategory.VALIDATION: "validation_errors",
    ErrorCategory.CRYPTOGRAPHIC: "cryptographic_errors",
    ErrorCategory.CONFIGURATION: "configuration_errors",
    ErrorCategory.SYSTEM: "system_errors",
}


@dataclass(frozen=True, slots=True)
class ErrorCounts:
    """Monotonic error counters, one per ErrorCategory."""

    validation_errors: int = 0
    cryptographic_errors: int = 0
    configuration_errors: int = 0
    system_errors: int = 0

    @property
    def total(self) -> int:
        return (
            self.validation_errors
            + self.cryptographic_errors
            + self.configuration_errors
            + self.system_errors
        )

    def get(self, category: ErrorCategory) -> int:
        """Get the counter for a category."""
        return getattr(self, _CATEGORY_FIELDS[category])

    def incremented(self, category: ErrorCategory, amount: int = 1) -> "ErrorCounts":
        """
        Return a copy with one category counter raised.

        Args:
            category: Error bucket to increment
            amount: Non-negative increment

        Raises:
            ValueError: If amount is negative (counters never decrease)
        """
        if amount < 0:
            raise ValueError(f"Error counters cannot decrease, got amount={amount}")
        name = _CATEGORY_FIELDS[category]
        return replace(self, **{name: getattr(self, name) + amount})

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "validation_errors": self.validation_errors,
            "cryptographic_errors": self.cryptographic_errors,
            "configuration_errors": self.configuration_errors,
            "system_errors": self.system_errors,
        }


@dataclass(frozen=True, slots=True)
class MemoryUsage:
    """Point-in-time process memory figures in bytes."""

    heap_used: int = 0
    heap_total: int = 0
    external: int = 0
    rss: int = 0

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "heap_used": self.heap_used,
            "heap_total": self.heap_total,
            "external": self.external,
            "rss": self.rss,
        }


@dataclass(frozen=True, slots=True)
class MetricsSnapshot:
    """Complete metrics structure returned by PerformanceMonitor.get_metrics()."""

    latency: LatencyStats = field(default_factory=LatencyStats)
    throughput: ThroughputStats = field(default_factory=ThroughputStats)
    errors: ErrorCounts = field(default_factory=ErrorCounts)
    memory: MemoryUsage = field(default_factory=MemoryUsage)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "latency": self.latency.to_dict(),
            "throughput": self.throughput.to_dict(),
            "errors": self.errors.to_dict(),
            "memory": self.memory.to_dict(),
        }


@dataclass(frozen=True, slots=True)
class PerformanceSummary:
    """Derived summary returned by PerformanceMonitor.get_summary()."""

    uptime_ms: float
    average_latency: float
    current_throughput: float
    peak_throughput: float
    error_rate: float
    memory_usage: int
    status: HealthStatus

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "uptime_ms": self.uptime_ms,
            "average_latency_ms": self.average_latency,
            "current_throughput": self.current_throughput,
            "peak_throughput": self.peak_throughput,
            "error_rate": self.error_rate,
            "memory_usage": self.memory_usage,
            "status": self.status.value,
        }
