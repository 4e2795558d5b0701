"""
Beacon Agent - Lightweight host telemetry agent.

Samples CPU and disk utilization and reports them to a collector
using a bearer token obtained through a shared-secret login.
"""

from .agent import AgentState, TelemetryAgent, run_agent
from .auth import Authenticator
from .collectors import MetricSampler
from .config import AgentConfig
from .errors import AuthError, BeaconError, ConfigError, ReportError, SampleError
from .models import Sample
from .sender import MetricsReporter

__all__ = [
    "AgentState",
    "TelemetryAgent",
    "run_agent",
    "Authenticator",
    "MetricSampler",
    "AgentConfig",
    "MetricsReporter",
    "Sample",
    "BeaconError",
    "ConfigError",
    "AuthError",
    "SampleError",
    "ReportError",
]
