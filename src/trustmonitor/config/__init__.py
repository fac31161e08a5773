"""Validated threshold and bound schemas for the performance monitor."""

from trustmonitor.config.thresholds import (
    HealthThresholds,
    MonitorConfig,
    VerificationBounds,
    build_model,
)

__all__ = [
    "HealthThresholds",
    "MonitorConfig",
    "VerificationBounds",
    "build_model",
]
