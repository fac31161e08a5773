"""
Validated numeric bounds for the performance monitor.

Pydantic schemas for health thresholds, verification bounds supplied by the
verification pipeline, and the monitor's own windowing/smoothing settings.
"""

from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from trustmonitor.core.exceptions import ConfigurationError

M = TypeVar("M", bound=BaseModel)

MIB = 1024 * 1024

# Acceptable latency ceiling range for the verification pipeline (ms)
MIN_LATENCY_CEILING_MS = 1
MAX_LATENCY_CEILING_MS = 10000


class VerificationBounds(BaseModel):
    """Static bounds of the verification pipeline feeding the monitor."""

    model_config = ConfigDict(frozen=True)

    max_latency_ms: float = Field(
        10, ge=MIN_LATENCY_CEILING_MS, le=MAX_LATENCY_CEILING_MS,
        description="Acceptable latency ceiling per verification",
    )
    max_batch_size: int = Field(100, ge=1, le=1000, description="Largest batch accepted")


class HealthThresholds(BaseModel):
    """
    Thresholds consumed by the health classifier.

    Defaults: warning above 50ms / 5% errors, critical above 100ms / 10%
    errors, healthy gate requires heap below 100 MiB.
    """

    model_config = ConfigDict(frozen=True)

    warning_latency_ms: float = Field(50.0, gt=0)
    critical_latency_ms: float = Field(100.0, gt=0)
    warning_error_rate: float = Field(0.05, ge=0, le=1)
    critical_error_rate: float = Field(0.10, ge=0, le=1)
    max_heap_bytes: int = Field(100 * MIB, gt=0)

    @model_validator(mode="after")
    def _check_ordering(self) -> "HealthThresholds":
        if self.warning_latency_ms > self.critical_latency_ms:
            raise ValueError(
                f"warning_latency_ms ({self.warning_latency_ms}) must not exceed "
                f"critical_latency_ms ({self.critical_latency_ms})"
            )
        if self.warning_error_rate > self.critical_error_rate:
            raise ValueError(
                f"warning_error_rate ({self.warning_error_rate}) must not exceed "
                f"critical_error_rate ({self.critical_error_rate})"
            )
        return self

    @classmethod
    def for_latency_ceiling(cls, max_latency_ms: float, **overrides: Any) -> "HealthThresholds":
        """
        Derive latency thresholds from a pipeline latency ceiling.

        warning = ceiling, critical = 2 x ceiling.

        Args:
            max_latency_ms: Ceiling in [1, 10000] ms
            **overrides: Other threshold fields

        Raises:
            ConfigurationError: If the ceiling is out of range
        """
        bounds = build_model(VerificationBounds, {"max_latency_ms": max_latency_ms})
        return build_model(
            cls,
            {
                "warning_latency_ms": bounds.max_latency_ms,
                "critical_latency_ms": bounds.max_latency_ms * 2,
                **overrides,
            },
        )


class MonitorConfig(BaseModel):
    """Windowing and smoothing settings for a PerformanceMonitor."""

    model_config = ConfigDict(frozen=True)

    window_capacity: int = Field(1000, ge=2, description="Retained latency samples")
    throughput_sample_count: int = Field(100, ge=2)
    throughput_window_ms: float = Field(5000.0, gt=0)
    ewma_alpha: float = Field(0.1, gt=0, le=1)
    thresholds: HealthThresholds = Field(default_factory=HealthThresholds)


def build_model(schema: Type[M], params: Dict[str, Any]) -> M:
    """
    Validate params against a schema, failing fast with ConfigurationError.

    Args:
        schema: Pydantic model class
        params: Raw field values

    Returns:
        Validated model instance

    Raises:
        ConfigurationError: If validation fails
    """
    try:
        return schema.model_validate(params)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid {schema.__name__}: {e}") from e
