"""Configuration management using Pydantic.

This module provides type-safe configuration with validation.
Application settings are loaded from the environment and the .env file;
deployment inputs (CIDR blocks, zones, instance settings) are loaded from
config.yaml by ``config_loader``.
"""

import ipaddress
from enum import Enum
from pathlib import Path
from typing import Annotated, Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .project_settings import (
    DEFAULT_AMI_ID,
    DEFAULT_INSTANCE_TYPE,
    DEFAULT_PRIVATE_SUBNET_CIDRS,
    DEFAULT_PUBLIC_SUBNET_CIDRS,
    DEFAULT_VPC_CIDR,
)

# Find .env file in project root (parent of src/)
_PACKAGE_DIR = Path(__file__).parent
_PROJECT_ROOT = _PACKAGE_DIR.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def validate_cidr(value: str) -> str:
    """Check that ``value`` is IPv4 CIDR notation and return it unchanged."""
    try:
        ipaddress.IPv4Network(value, strict=False)
    except ValueError as e:
        raise ValueError(f"invalid CIDR block {value!r}: {e}") from e
    if "/" not in value:
        raise ValueError(f"invalid CIDR block {value!r}: missing prefix length")
    return value


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class NetworkConfig(BaseModel):
    """Inputs of the network deployment."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    project: str = "vpc-modular"
    vpc_cidr: str = DEFAULT_VPC_CIDR
    # Empty list means "discover the zones of the target region"
    availability_zones: list[str] = Field(default_factory=list)
    public_subnet_cidrs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PUBLIC_SUBNET_CIDRS)
    )
    private_subnet_cidrs: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PRIVATE_SUBNET_CIDRS)
    )

    @field_validator("vpc_cidr")
    @classmethod
    def validate_vpc_cidr(cls, v: str) -> str:
        return validate_cidr(v)

    @field_validator("public_subnet_cidrs", "private_subnet_cidrs")
    @classmethod
    def validate_subnet_cidrs(cls, v: list[str]) -> list[str]:
        return [validate_cidr(cidr) for cidr in v]


class ServerConfig(BaseModel):
    """Inputs of the application deployment."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    project: str = "app-modular"
    ami_id: str = DEFAULT_AMI_ID
    instance_type: str = DEFAULT_INSTANCE_TYPE
    user_data_file: str = "assets/user_data.sh"
    http_port: Annotated[int, Field(ge=1, le=65535)] = 80


class EnvironmentConfig(BaseModel):
    """One environment section of config.yaml."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    account: str | None = None
    region: str | None = None
    network: NetworkConfig = Field(default_factory=NetworkConfig)
    app: ServerConfig = Field(default_factory=ServerConfig)
    tags: dict[str, str] = Field(default_factory=dict)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings are loaded from:
    1. Environment variables (highest priority)
    2. .env file in project root (if it exists)
    3. Default values (lowest priority)

    The .env file is located at: <project_root>/.env
    """

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic settings
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = False
    log_level: LogLevel = LogLevel.INFO

    # Application metadata
    app_name: str = "Modular VPC CDK"
    app_version: str = "0.1.0"

    # Deployment selection
    stack: str = "dev"
    config_file: Path = _PROJECT_ROOT / "config.yaml"

    @field_validator("environment", mode="before")
    @classmethod
    def validate_environment(cls, v: Any) -> Environment:
        """Validate and convert environment string."""
        if isinstance(v, str):
            return Environment(v.lower())
        return v

    @property
    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == Environment.PRODUCTION

    @property
    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """Check if running in test mode."""
        return self.environment == Environment.TESTING
