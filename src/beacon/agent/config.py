"""
Agent Configuration.
"""

import dataclasses
from dataclasses import dataclass, field
from typing import Optional
import yaml
from pydantic import ValidationError

from .errors import ConfigError

SAMPLER_STRATEGIES = ("command", "psutil")


@dataclass
class CollectorConfig:
    """Collector server connection."""
    url: str = "http://localhost:8080"
    login_path: str = "/login"
    metrics_path: str = "/api/metrics"
    timeout: float = 5.0  # seconds, applies to login and ingestion

    @property
    def login_url(self) -> str:
        return self.url.rstrip('/') + self.login_path

    @property
    def metrics_url(self) -> str:
        return self.url.rstrip('/') + self.metrics_path


@dataclass
class AuthConfig:
    """Shared-secret login settings."""
    shared_secret: Optional[str] = None
    reauthenticate: bool = True  # log in again after a 401/403 from ingestion
    startup_retries: int = 0
    retry_delay: float = 5.0


@dataclass
class SamplingConfig:
    """Metric sampling settings."""
    interval: float = 5.0  # seconds between cycle starts
    strategy: str = "command"
    disk_path: str = "/"
    command_timeout: float = 10.0
    parallel: bool = True


@dataclass
class AgentConfig:
    """Main agent configuration."""
    collector: CollectorConfig = field(default_factory=CollectorConfig)
    auth: AuthConfig = field(default_factory=AuthConfig)
    sampling: SamplingConfig = field(default_factory=SamplingConfig)

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_yaml(cls, path: str) -> "AgentConfig":
        """Load configuration from YAML file."""
        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a mapping at top level")
        return cls._from_dict(data)

    @classmethod
    def from_env(cls) -> "AgentConfig":
        """Load configuration from BEACON_* environment variables."""
        from ..config import Settings

        try:
            env = Settings()
        except ValidationError as e:
            raise ConfigError(f"Invalid BEACON_* environment: {e}") from e
        config = cls()

        config.collector.url = env.collector_url
        config.collector.timeout = env.request_timeout
        config.auth.shared_secret = env.shared_secret
        config.auth.reauthenticate = env.reauthenticate
        config.auth.startup_retries = env.startup_retries
        config.auth.retry_delay = env.retry_delay
        config.sampling.interval = env.interval
        config.sampling.strategy = env.sampler
        config.sampling.disk_path = env.disk_path
        config.sampling.command_timeout = env.command_timeout
        config.log_level = env.log_level
        if env.log_file:
            config.log_file = str(env.log_file)

        return config

    @classmethod
    def _from_dict(cls, data: dict) -> "AgentConfig":
        """Create config from dictionary."""
        config = cls()

        for key in ["log_level", "log_file"]:
            if key in data:
                setattr(config, key, data[key])

        try:
            if "collector" in data:
                config.collector = CollectorConfig(**data["collector"])
            if "auth" in data:
                config.auth = AuthConfig(**data["auth"])
            if "sampling" in data:
                config.sampling = SamplingConfig(**data["sampling"])
        except TypeError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

        return config

    def _check_types(self):
        """Reject values of the wrong type, e.g. a quoted YAML number."""
        numbers = {
            "collector.timeout": self.collector.timeout,
            "auth.retry_delay": self.auth.retry_delay,
            "sampling.interval": self.sampling.interval,
            "sampling.command_timeout": self.sampling.command_timeout,
        }
        for name, value in numbers.items():
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"{name} must be a number, got {value!r}")

        retries = self.auth.startup_retries
        if isinstance(retries, bool) or not isinstance(retries, int):
            raise ConfigError(f"auth.startup_retries must be an integer, got {retries!r}")

        flags = {
            "auth.reauthenticate": self.auth.reauthenticate,
            "sampling.parallel": self.sampling.parallel,
        }
        for name, value in flags.items():
            if not isinstance(value, bool):
                raise ConfigError(f"{name} must be true or false, got {value!r}")

        strings = {
            "collector.url": self.collector.url,
            "sampling.disk_path": self.sampling.disk_path,
        }
        for name, value in strings.items():
            if not isinstance(value, str):
                raise ConfigError(f"{name} must be a string, got {value!r}")

    def validate(self, require_secret: bool = True) -> "AgentConfig":
        """Check the configuration, raising ConfigError on the first problem."""
        self._check_types()
        if require_secret and not self.auth.shared_secret:
            raise ConfigError("shared secret is not configured (BEACON_SHARED_SECRET)")
        if self.sampling.interval <= 0:
            raise ConfigError(f"sampling interval must be positive, got {self.sampling.interval}")
        if self.collector.timeout <= 0:
            raise ConfigError(f"collector timeout must be positive, got {self.collector.timeout}")
        if self.sampling.command_timeout <= 0:
            raise ConfigError(
                f"command timeout must be positive, got {self.sampling.command_timeout}"
            )
        if self.sampling.strategy not in SAMPLER_STRATEGIES:
            raise ConfigError(
                f"unknown sampler strategy {self.sampling.strategy!r}, "
                f"expected one of {', '.join(SAMPLER_STRATEGIES)}"
            )
        if self.auth.startup_retries < 0:
            raise ConfigError("auth.startup_retries cannot be negative")
        return self

    def to_dict(self) -> dict:
        return dataclasses.asdict(self)

    def to_yaml(self, path: str) -> None:
        """Save configuration to YAML file."""
        with open(path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
