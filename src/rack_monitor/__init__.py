"""
Rack Monitor - Rack-level hardware health monitoring with automatic remediation requests.

Classifies every server in a fleet of racks as healthy, shaky or unhealthy,
opens inspection incidents for shaky servers and orders warranted
replacements for unhealthy ones.
"""

__version__ = "1.0.0"

from rack_monitor.classifier import classify
from rack_monitor.config import Config, RackConfig, Thresholds
from rack_monitor.errors import ConfigurationError, RackMonitorError
from rack_monitor.models import (
    HealthIncident,
    HealthStatus,
    PassResult,
    RequestAction,
    Server,
    Warranty,
)
from rack_monitor.monitor import RackMonitor

__all__ = [
    "classify",
    "Config",
    "ConfigurationError",
    "HealthIncident",
    "HealthStatus",
    "PassResult",
    "RackConfig",
    "RackMonitor",
    "RackMonitorError",
    "RequestAction",
    "Server",
    "Thresholds",
    "Warranty",
]
