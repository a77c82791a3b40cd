"""Tests for settings and configuration."""

from pathlib import Path
from tempfile import TemporaryDirectory

import pytest
from pydantic import ValidationError

from modular_vpc_cdk.config import (
    Environment,
    EnvironmentConfig,
    LogLevel,
    NetworkConfig,
    ServerConfig,
    Settings,
)
from modular_vpc_cdk.settings import get_settings


class TestSettings:
    """Test suite for Settings class."""

    def test_settings_defaults(self) -> None:
        """Test that settings have correct defaults."""
        settings = Settings(_env_file=None)
        assert settings.environment == Environment.DEVELOPMENT
        assert settings.debug is False
        assert settings.log_level == LogLevel.INFO
        assert settings.app_name == "Modular VPC CDK"
        assert settings.app_version == "0.1.0"
        assert settings.stack == "dev"
        assert settings.config_file.name == "config.yaml"

    def test_settings_from_env_vars(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings can be loaded from environment variables."""
        monkeypatch.setenv("ENVIRONMENT", "production")
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("STACK", "prod")

        settings = Settings(_env_file=None)

        assert settings.environment == Environment.PRODUCTION
        assert settings.debug is True
        assert settings.log_level == LogLevel.DEBUG
        assert settings.stack == "prod"

    def test_settings_from_env_file(self) -> None:
        """Test that settings can be loaded from .env file."""
        with TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text(
                "ENVIRONMENT=staging\n"
                "LOG_LEVEL=WARNING\n"
                "STACK=staging\n"
            )

            settings = Settings(_env_file=str(env_file))

            assert settings.environment == Environment.STAGING
            assert settings.log_level == LogLevel.WARNING
            assert settings.stack == "staging"

    def test_settings_env_vars_override_env_file(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables override .env file values."""
        with TemporaryDirectory() as tmpdir:
            env_file = Path(tmpdir) / ".env"
            env_file.write_text("ENVIRONMENT=staging\n")

            monkeypatch.setenv("ENVIRONMENT", "production")

            settings = Settings(_env_file=str(env_file))

            assert settings.environment == Environment.PRODUCTION

    def test_settings_case_insensitive(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings are case-insensitive."""
        monkeypatch.setenv("environment", "PRODUCTION")
        monkeypatch.setenv("DEBUG", "TRUE")

        settings = Settings(_env_file=None)

        assert settings.environment == Environment.PRODUCTION
        assert settings.debug is True

    def test_settings_validation_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that invalid settings raise validation errors."""
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_is_production_property(self) -> None:
        """Test is_production property."""
        settings = Settings(environment=Environment.PRODUCTION)
        assert settings.is_production is True
        assert settings.is_development is False
        assert settings.is_testing is False

    def test_is_testing_property(self) -> None:
        """Test is_testing property."""
        settings = Settings(environment=Environment.TESTING)
        assert settings.is_production is False
        assert settings.is_testing is True


class TestGetSettings:
    """Test suite for get_settings function."""

    def test_get_settings_returns_settings_instance(self) -> None:
        """Test that get_settings returns a Settings instance."""
        settings = get_settings()
        assert isinstance(settings, Settings)

    def test_get_settings_caching(self) -> None:
        """Test that get_settings caches the instance."""
        assert get_settings() is get_settings()

    def test_get_settings_with_env_changes(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that settings reflect environment at cache time."""
        get_settings.cache_clear()

        monkeypatch.setenv("STACK", "prod")

        assert get_settings().stack == "prod"


class TestDeploymentModels:
    """Test suite for the config.yaml models."""

    def test_network_defaults(self) -> None:
        """Test that NetworkConfig defaults to the three-tier layout."""
        network = NetworkConfig()

        assert network.vpc_cidr == "10.0.0.0/16"
        assert network.availability_zones == []
        assert network.public_subnet_cidrs == ["10.0.0.0/24", "10.0.1.0/24", "10.0.2.0/24"]
        assert network.private_subnet_cidrs == [
            "10.0.100.0/24",
            "10.0.101.0/24",
            "10.0.102.0/24",
        ]

    def test_network_rejects_bad_cidr(self) -> None:
        """Test CIDR validation of network inputs."""
        with pytest.raises(ValidationError):
            NetworkConfig(vpc_cidr="10.0.0.0/99")

        with pytest.raises(ValidationError):
            NetworkConfig(public_subnet_cidrs=["10.0.0.0/24", "subnet-a"])

    def test_network_rejects_unknown_keys(self) -> None:
        """Test that typos in config.yaml are not silently ignored."""
        with pytest.raises(ValidationError):
            NetworkConfig(public_subnets=["10.0.0.0/24"])

    def test_server_defaults(self) -> None:
        """Test ServerConfig default values."""
        server = ServerConfig()

        assert server.ami_id == "ami-0d1bf5b68307103c2"
        assert server.instance_type == "t3a.micro"
        assert server.http_port == 80

    def test_server_port_range(self) -> None:
        """Test ServerConfig port validation."""
        with pytest.raises(ValidationError):
            ServerConfig(http_port=0)

    def test_environment_config_frozen(self) -> None:
        """Test that EnvironmentConfig is frozen (immutable)."""
        env_config = EnvironmentConfig()

        with pytest.raises(ValidationError):
            env_config.region = "us-east-1"


class TestEnvironmentEnum:
    """Test suite for Environment enum."""

    def test_environment_values(self) -> None:
        """Test Environment enum values."""
        assert Environment.DEVELOPMENT.value == "development"
        assert Environment.STAGING.value == "staging"
        assert Environment.PRODUCTION.value == "production"
        assert Environment.TESTING.value == "testing"


class TestLogLevelEnum:
    """Test suite for LogLevel enum."""

    def test_log_level_values(self) -> None:
        """Test LogLevel enum values."""
        assert LogLevel.DEBUG.value == "DEBUG"
        assert LogLevel.INFO.value == "INFO"
        assert LogLevel.WARNING.value == "WARNING"
        assert LogLevel.ERROR.value == "ERROR"
        assert LogLevel.CRITICAL.value == "CRITICAL"
