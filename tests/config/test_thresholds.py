"""
Unit tests for threshold and bound schemas
"""

import pytest
from pydantic import ValidationError

from trustmonitor.config.thresholds import (
    MIB,
    HealthThresholds,
    MonitorConfig,
    VerificationBounds,
    build_model,
)
from trustmonitor.core.exceptions import ConfigurationError


class TestHealthThresholds:
    """Test HealthThresholds defaults and validation"""

    def test_defaults(self):
        thresholds = HealthThresholds()

        assert thresholds.warning_latency_ms == 50.0
        assert thresholds.critical_latency_ms == 100.0
        assert thresholds.warning_error_rate == 0.05
        assert thresholds.critical_error_rate == 0.10
        assert thresholds.max_heap_bytes == 100 * MIB

    def test_warning_above_critical_rejected(self):
        with pytest.raises(ConfigurationError) as exc_info:
            build_model(HealthThresholds, {"warning_latency_ms": 200.0})

        assert "warning_latency_ms" in str(exc_info.value)

    def test_error_rate_ordering_rejected(self):
        with pytest.raises(ValidationError):
            HealthThresholds(warning_error_rate=0.2, critical_error_rate=0.1)

    def test_error_rate_above_one_rejected(self):
        with pytest.raises(ConfigurationError):
            build_model(HealthThresholds, {"critical_error_rate": 1.5})

    def test_frozen(self):
        thresholds = HealthThresholds()
        with pytest.raises(ValidationError):
            thresholds.warning_latency_ms = 1.0

    def test_for_latency_ceiling(self):
        thresholds = HealthThresholds.for_latency_ceiling(20, warning_error_rate=0.01)

        assert thresholds.warning_latency_ms == 20.0
        assert thresholds.critical_latency_ms == 40.0
        assert thresholds.warning_error_rate == 0.01

    @pytest.mark.parametrize("ceiling", [0, 0.5, 10001, -3])
    def test_for_latency_ceiling_out_of_range(self, ceiling):
        with pytest.raises(ConfigurationError):
            HealthThresholds.for_latency_ceiling(ceiling)


class TestVerificationBounds:
    """Test verification pipeline bounds"""

    def test_defaults(self):
        bounds = VerificationBounds()

        assert bounds.max_latency_ms == 10
        assert bounds.max_batch_size == 100

    @pytest.mark.parametrize(
        "params",
        [
            {"max_latency_ms": 0},
            {"max_latency_ms": 10001},
            {"max_batch_size": 0},
            {"max_batch_size": 1001},
        ],
    )
    def test_out_of_range_fails_fast(self, params):
        with pytest.raises(ConfigurationError):
            build_model(VerificationBounds, params)

    def test_boundaries_accepted(self):
        bounds = build_model(
            VerificationBounds, {"max_latency_ms": 10000, "max_batch_size": 1}
        )

        assert bounds.max_latency_ms == 10000
        assert bounds.max_batch_size == 1


class TestMonitorConfig:
    """Test monitor settings"""

    def test_defaults(self):
        config = MonitorConfig()

        assert config.window_capacity == 1000
        assert config.throughput_sample_count == 100
        assert config.throughput_window_ms == 5000.0
        assert config.ewma_alpha == 0.1
        assert config.thresholds == HealthThresholds()

    @pytest.mark.parametrize(
        "params",
        [
            {"window_capacity": 1},
            {"ewma_alpha": 0},
            {"ewma_alpha": 1.5},
            {"throughput_window_ms": 0},
        ],
    )
    def test_invalid_settings(self, params):
        with pytest.raises(ConfigurationError):
            build_model(MonitorConfig, params)
