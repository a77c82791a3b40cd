"""Shared pytest fixtures for Modular VPC CDK."""

import aws_cdk as cdk
import pytest

from modular_vpc_cdk.tags import DeploymentContext

TEST_ENV = cdk.Environment(account="123456789012", region="eu-west-1")


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch) -> None:
    """Reset environment variables and settings cache for each test."""
    from modular_vpc_cdk.settings import get_settings

    get_settings.cache_clear()
    for var in ("ENVIRONMENT", "DEBUG", "LOG_LEVEL", "STACK", "CONFIG_FILE"):
        monkeypatch.delenv(var, raising=False)
    yield
    get_settings.cache_clear()


@pytest.fixture
def network_context() -> DeploymentContext:
    """Deployment context of the network stack under test."""
    return DeploymentContext(project="vpc-modular", stack="test")


@pytest.fixture
def app_context() -> DeploymentContext:
    """Deployment context of the application stack under test."""
    return DeploymentContext(project="app-modular", stack="test")


@pytest.fixture
def stack() -> cdk.Stack:
    """Empty stack to build components into."""
    app = cdk.App()
    return cdk.Stack(app, "TestStack", env=TEST_ENV)
