"""
Custom exceptions for the performance monitor
"""


class MonitorError(Exception):
    """Base exception for performance monitor errors"""


class ConfigurationError(MonitorError):
    """Configuration related errors"""


class InvalidSampleError(MonitorError):
    """Ingested sample rejected before it reached the monitor state"""
