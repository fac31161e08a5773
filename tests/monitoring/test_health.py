"""
Unit tests for health classification
"""

import pytest

from trustmonitor.config.thresholds import MIB, HealthThresholds
from trustmonitor.monitoring.health import (
    classify_health,
    error_rate,
    is_performance_healthy,
)
from trustmonitor.monitoring.stats import ErrorCounts, HealthStatus


class TestErrorRate:
    """Test window-relative error rate"""

    def test_no_operations(self):
        assert error_rate(ErrorCounts(), 0) == 0.0

    def test_all_categories_counted(self):
        errors = ErrorCounts(
            validation_errors=1,
            cryptographic_errors=1,
            configuration_errors=1,
            system_errors=1,
        )

        assert error_rate(errors, 96) == pytest.approx(0.04)

    def test_errors_without_samples(self):
        assert error_rate(ErrorCounts(system_errors=3), 0) == 1.0


class TestClassifyHealth:
    """Test tri-state verdict thresholds"""

    def test_healthy(self):
        assert classify_health(10.0, 0.0) == HealthStatus.HEALTHY

    def test_latency_exactly_fifty_is_not_critical(self):
        """50.0ms is on the warning boundary, which requires strictly greater"""
        status = classify_health(50.0, 0.0)

        assert status != HealthStatus.CRITICAL
        assert status == HealthStatus.HEALTHY

    def test_latency_above_fifty_warns(self):
        assert classify_health(50.1, 0.0) == HealthStatus.WARNING

    def test_latency_exactly_hundred_warns(self):
        assert classify_health(100.0, 0.0) == HealthStatus.WARNING

    def test_latency_above_hundred_is_critical(self):
        assert classify_health(100.1, 0.0) == HealthStatus.CRITICAL

    def test_error_rate_thresholds(self):
        assert classify_health(1.0, 0.05) == HealthStatus.HEALTHY
        assert classify_health(1.0, 0.06) == HealthStatus.WARNING
        assert classify_health(1.0, 0.10) == HealthStatus.WARNING
        assert classify_health(1.0, 0.11) == HealthStatus.CRITICAL

    def test_custom_thresholds(self):
        thresholds = HealthThresholds(warning_latency_ms=5.0, critical_latency_ms=10.0)

        assert classify_health(6.0, 0.0, thresholds) == HealthStatus.WARNING
        assert classify_health(11.0, 0.0, thresholds) == HealthStatus.CRITICAL


class TestIsPerformanceHealthy:
    """Test strict healthy gate"""

    def test_all_within_bounds(self):
        assert is_performance_healthy(10.0, 0.01, 10 * MIB) is True

    def test_latency_fifty_fails_gate(self):
        """Gate requires strictly below 50ms, stricter than the verdict"""
        assert is_performance_healthy(50.0, 0.0, 0) is False
        assert classify_health(50.0, 0.0) == HealthStatus.HEALTHY

    def test_error_rate_fails_gate(self):
        assert is_performance_healthy(10.0, 0.05, 0) is False

    def test_heap_fails_gate(self):
        assert is_performance_healthy(10.0, 0.0, 100 * MIB) is False
        assert is_performance_healthy(10.0, 0.0, 100 * MIB - 1) is True
