"""
Logging configuration with multi-handler setup and structured health logging
"""

import logging
import sys
import json
import time
from logging.handlers import RotatingFileHandler, TimedRotatingFileHandler
from pathlib import Path
from datetime import datetime, timezone
from contextlib import contextmanager
from typing import Generator

HEALTH_LOGGER_NAME = 'health'


class HealthLogFilter(logging.Filter):
    """
    Filter to isolate health events from general logging

    Only allows log records with logger name 'health' to pass through
    to the health-specific handler.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        """
        Determine if log record should be processed

        Args:
            record: Log record to evaluate

        Returns:
            True if record.name == 'health', False otherwise
        """
        return record.name == HEALTH_LOGGER_NAME


class MonitorLogger:
    """
    Centralized logging system for the performance monitor

    Features:
    - Multi-handler logging (console, file, health-specific)
    - Automatic log rotation (size-based and time-based)
    - Structured JSON logging for health events
    """

    def __init__(self, config: dict):
        """
        Initialize logging infrastructure

        Args:
            config: Configuration dictionary with keys:
                - log_level: str (DEBUG, INFO, WARNING, ERROR)
                - log_dir: str (directory path for log files)

        Raises:
            OSError: If log directory creation fails
        """
        self.log_level = config.get('log_level', 'INFO')
        self.log_dir = Path(config.get('log_dir', 'logs'))
        self.log_dir.mkdir(parents=True, exist_ok=True)
        self._setup_logging()

    def _setup_logging(self) -> None:
        """
        Configure root logger with all handlers

        Sets up:
        1. Console handler (INFO+, simple format)
        2. Rotating file handler (DEBUG+, detailed format)
        3. Health-specific handler (INFO, JSON lines, daily rotation)
        """
        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, self.log_level.upper()))

        # Clear existing handlers to avoid duplicates
        root_logger.handlers.clear()

        log_format = logging.Formatter(
            '%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s'
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(log_format)
        root_logger.addHandler(console_handler)

        # 10MB max, 5 backups
        file_handler = RotatingFileHandler(
            self.log_dir / 'monitor.log',
            maxBytes=10*1024*1024,
            backupCount=5
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(log_format)
        root_logger.addHandler(file_handler)

        # Health events only (daily rotation, 30-day retention)
        health_handler = TimedRotatingFileHandler(
            self.log_dir / 'health.log',
            when='midnight',
            backupCount=30
        )
        health_handler.setLevel(logging.INFO)
        health_handler.addFilter(HealthLogFilter())
        root_logger.addHandler(health_handler)

    @staticmethod
    def log_health_event(action: str, data: dict) -> None:
        """
        Log health events in structured JSON format

        Args:
            action: Event type (STATUS_CHANGED, MONITOR_RESET, etc.)
            data: Event-specific data dictionary

        Example:
            MonitorLogger.log_health_event('STATUS_CHANGED', {
                'previous': 'healthy',
                'current': 'warning',
                'average_latency_ms': 62.5
            })
        """
        logger = logging.getLogger(HEALTH_LOGGER_NAME)
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'action': action,
            **data
        }
        logger.info(json.dumps(log_entry))


@contextmanager
def log_execution_time(operation: str) -> Generator[None, None, None]:
    """
    Context manager for measuring and logging execution time

    Args:
        operation: Human-readable operation description

    Usage:
        with log_execution_time('metrics_snapshot'):
            metrics = monitor.get_metrics()

    Logs at DEBUG level: "{operation} completed in {elapsed:.3f}s"
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logging.getLogger(__name__).debug(f"{operation} completed in {elapsed:.3f}s")
