"""
Configuration management with INI files and environment overrides
"""

import os
from configparser import ConfigParser, SectionProxy
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from trustmonitor.config.thresholds import (
    HealthThresholds,
    MonitorConfig,
    build_model,
)
from trustmonitor.core.exceptions import ConfigurationError

CONFIG_FILENAME = "monitor_config.ini"

ENV_LOG_LEVEL = "TRUSTMONITOR_LOG_LEVEL"
ENV_WINDOW_CAPACITY = "TRUSTMONITOR_WINDOW_CAPACITY"
ENV_MAX_LATENCY_MS = "TRUSTMONITOR_MAX_LATENCY_MS"


@dataclass
class LoggingConfig:
    """Logging system configuration"""
    log_level: str = "INFO"
    log_dir: str = "logs"

    def __post_init__(self):
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() not in valid_levels:
            raise ConfigurationError(
                f"Invalid log level: {self.log_level}. "
                f"Must be one of {valid_levels}"
            )

    def to_dict(self) -> dict:
        return {"log_level": self.log_level, "log_dir": self.log_dir}


class ConfigManager:
    """
    Manages monitor configuration from an INI file with environment overrides

    Missing file or sections fall back to defaults.
    Priority: ENV > INI file > defaults
    """

    def __init__(self, config_dir: str = "configs"):
        self.config_dir = Path(config_dir)
        self._parser = self._read_config_file()
        self._monitor_config = self._load_monitor_config()
        self._logging_config = self._load_logging_config()

    def _read_config_file(self) -> ConfigParser:
        config = ConfigParser()
        config_file = self.config_dir / CONFIG_FILENAME
        if config_file.exists():
            config.read(config_file)
        return config

    def _section(self, name: str) -> Optional[SectionProxy]:
        return self._parser[name] if name in self._parser else None

    def _load_thresholds(self) -> HealthThresholds:
        """
        Load health thresholds

        TRUSTMONITOR_MAX_LATENCY_MS derives both latency thresholds from a
        pipeline latency ceiling and takes precedence over the INI values.
        """
        params: Dict[str, Any] = {}
        section = self._section("thresholds")
        if section is not None:
            try:
                for key in ("warning_latency_ms", "critical_latency_ms",
                            "warning_error_rate", "critical_error_rate"):
                    if key in section:
                        params[key] = section.getfloat(key)
                if "max_heap_mb" in section:
                    params["max_heap_bytes"] = int(section.getfloat("max_heap_mb") * 1024 * 1024)
            except ValueError as e:
                raise ConfigurationError(f"Invalid [thresholds] value: {e}") from e

        ceiling = os.getenv(ENV_MAX_LATENCY_MS)
        if ceiling is not None:
            params.pop("warning_latency_ms", None)
            params.pop("critical_latency_ms", None)
            return HealthThresholds.for_latency_ceiling(
                _parse_number(ENV_MAX_LATENCY_MS, ceiling, float), **params
            )

        return build_model(HealthThresholds, params)

    def _load_monitor_config(self) -> MonitorConfig:
        """Load windowing/smoothing settings plus thresholds"""
        params: Dict[str, Any] = {}
        section = self._section("monitor")
        if section is not None:
            try:
                if "window_capacity" in section:
                    params["window_capacity"] = section.getint("window_capacity")
                if "throughput_sample_count" in section:
                    params["throughput_sample_count"] = section.getint("throughput_sample_count")
                if "throughput_window_ms" in section:
                    params["throughput_window_ms"] = section.getfloat("throughput_window_ms")
                if "ewma_alpha" in section:
                    params["ewma_alpha"] = section.getfloat("ewma_alpha")
            except ValueError as e:
                raise ConfigurationError(f"Invalid [monitor] value: {e}") from e

        capacity = os.getenv(ENV_WINDOW_CAPACITY)
        if capacity is not None:
            params["window_capacity"] = _parse_number(ENV_WINDOW_CAPACITY, capacity, int)

        params["thresholds"] = self._load_thresholds()
        return build_model(MonitorConfig, params)

    def _load_logging_config(self) -> LoggingConfig:
        """Load logging configuration"""
        section = self._section("logging")
        log_level = section.get("log_level", "INFO") if section is not None else "INFO"
        log_dir = section.get("log_dir", "logs") if section is not None else "logs"

        env_level = os.getenv(ENV_LOG_LEVEL)
        if env_level:
            log_level = env_level

        return LoggingConfig(log_level=log_level, log_dir=log_dir)

    @property
    def monitor_config(self) -> MonitorConfig:
        """Get monitor configuration"""
        return self._monitor_config

    @property
    def logging_config(self) -> LoggingConfig:
        """Get logging configuration"""
        return self._logging_config


def _parse_number(name: str, raw: str, kind: type):
    try:
        return kind(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be a {kind.__name__}, got {raw!r}") from e
