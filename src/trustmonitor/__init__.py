"""
TrustWrapper verification performance monitor
Main package initialization
"""

__version__ = "0.1.0"

from trustmonitor.monitoring import PerformanceMonitor
from trustmonitor.utils.config import ConfigManager

__all__ = ["PerformanceMonitor", "ConfigManager"]
