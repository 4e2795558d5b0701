"""
Agent error taxonomy.

AuthError is fatal at startup, SampleError costs one metric for one cycle,
ReportError costs one delivery. Components raise; the agent loop logs.
"""

from typing import Optional


class BeaconError(Exception):
    """Base class for all agent errors."""


class ConfigError(BeaconError):
    """Invalid or incomplete configuration."""


class AuthError(BeaconError):
    """Login against the collector failed."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class SampleError(BeaconError):
    """A sampler could not produce a value."""

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output

    def __str__(self) -> str:
        message = super().__str__()
        if self.output:
            return f"{message} (output: {self.output.strip()!r})"
        return message


class ReportError(BeaconError):
    """Delivering a sample to the collector failed."""

    def __init__(self, message: str, status: Optional[int] = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body

    @property
    def auth_rejected(self) -> bool:
        """True when the collector refused the bearer token."""
        return self.status in (401, 403)
