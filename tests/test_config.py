"""
Beacon Agent - Config Tests
"""

import pytest

from beacon.agent.config import AgentConfig, CollectorConfig
from beacon.agent.errors import ConfigError


class TestCollectorConfig:
    """Test endpoint URL building."""

    def test_urls(self):
        config = CollectorConfig(url="http://collector:8080/")

        assert config.login_url == "http://collector:8080/login"
        assert config.metrics_url == "http://collector:8080/api/metrics"


class TestYaml:
    """Test YAML loading and saving."""

    def test_round_trip(self, tmp_path):
        path = tmp_path / "beacon.yaml"
        config = AgentConfig()
        config.collector.url = "http://collector:9000"
        config.auth.shared_secret = "s3cret"
        config.sampling.interval = 10
        config.sampling.strategy = "psutil"

        config.to_yaml(str(path))
        loaded = AgentConfig.from_yaml(str(path))

        assert loaded == config

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "beacon.yaml"
        path.write_text("auth:\n  shared_secret: abc\nlog_level: DEBUG\n")

        config = AgentConfig.from_yaml(str(path))

        assert config.auth.shared_secret == "abc"
        assert config.auth.reauthenticate is True
        assert config.log_level == "DEBUG"
        assert config.sampling.interval == 5.0
        assert config.collector.timeout == 5.0

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "beacon.yaml"
        path.write_text("sampling:\n  period: 3\n")

        with pytest.raises(ConfigError):
            AgentConfig.from_yaml(str(path))

    def test_empty_file(self, tmp_path):
        path = tmp_path / "beacon.yaml"
        path.write_text("")

        assert AgentConfig.from_yaml(str(path)) == AgentConfig()


class TestEnv:
    """Test BEACON_* environment variables."""

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BEACON_COLLECTOR_URL", "http://10.0.0.5:8080")
        monkeypatch.setenv("BEACON_SHARED_SECRET", "from-env")
        monkeypatch.setenv("BEACON_INTERVAL", "7")
        monkeypatch.setenv("BEACON_SAMPLER", "psutil")

        config = AgentConfig.from_env()

        assert config.collector.url == "http://10.0.0.5:8080"
        assert config.auth.shared_secret == "from-env"
        assert config.sampling.interval == 7.0
        assert config.sampling.strategy == "psutil"

    def test_auth_and_command_settings(self, monkeypatch):
        monkeypatch.setenv("BEACON_COMMAND_TIMEOUT", "2.5")
        monkeypatch.setenv("BEACON_REAUTHENTICATE", "false")
        monkeypatch.setenv("BEACON_STARTUP_RETRIES", "3")
        monkeypatch.setenv("BEACON_RETRY_DELAY", "1.5")

        config = AgentConfig.from_env()

        assert config.sampling.command_timeout == 2.5
        assert config.auth.reauthenticate is False
        assert config.auth.startup_retries == 3
        assert config.auth.retry_delay == 1.5

    @pytest.mark.parametrize("name,value", [
        ("BEACON_INTERVAL", "0"),
        ("BEACON_REQUEST_TIMEOUT", "abc"),
        ("BEACON_STARTUP_RETRIES", "-1"),
    ])
    def test_invalid_env_raises_config_error(self, monkeypatch, name, value):
        monkeypatch.setenv(name, value)

        with pytest.raises(ConfigError, match="BEACON_"):
            AgentConfig.from_env()


class TestValidate:
    """Test configuration validation."""

    def valid(self) -> AgentConfig:
        config = AgentConfig()
        config.auth.shared_secret = "s3cret"
        return config

    def test_valid(self):
        config = self.valid()
        assert config.validate() is config

    def test_missing_secret(self):
        with pytest.raises(ConfigError, match="shared secret"):
            AgentConfig().validate()

    def test_secret_optional_for_sampling(self):
        config = AgentConfig()
        assert config.validate(require_secret=False) is config

    @pytest.mark.parametrize("section,field,value", [
        ("sampling", "interval", "fast"),
        ("sampling", "parallel", "yes"),
        ("collector", "timeout", True),
        ("auth", "startup_retries", 1.5),
        ("collector", "url", 8080),
    ])
    def test_wrong_types(self, section, field, value):
        config = self.valid()
        setattr(getattr(config, section), field, value)

        with pytest.raises(ConfigError, match=field):
            config.validate()

    def test_quoted_number_from_yaml(self, tmp_path):
        path = tmp_path / "beacon.yaml"
        path.write_text('auth:\n  shared_secret: abc\nsampling:\n  interval: "fast"\n')

        config = AgentConfig.from_yaml(str(path))

        with pytest.raises(ConfigError, match="sampling.interval"):
            config.validate()

    @pytest.mark.parametrize("section,field,value", [
        ("sampling", "interval", 0),
        ("sampling", "command_timeout", -1),
        ("sampling", "strategy", "procfs"),
        ("collector", "timeout", 0),
        ("auth", "startup_retries", -2),
    ])
    def test_invalid_values(self, section, field, value):
        config = self.valid()
        setattr(getattr(config, section), field, value)

        with pytest.raises(ConfigError):
            config.validate()
