"""Settings and configuration access.

This module provides a clean interface for accessing application settings.
Settings are automatically loaded from .env file via pydantic-settings.
No load_dotenv() needed!

Usage:
    Basic usage:
        >>> from modular_vpc_cdk.settings import get_settings
        >>> settings = get_settings()
        >>> print(settings.app_name)
        Modular VPC CDK

    Select the config.yaml section to deploy:
        >>> settings = get_settings()
        >>> print(settings.stack)
        dev

    Testing with custom settings:
        >>> import pytest
        >>> def test_example(monkeypatch):
        ...     monkeypatch.setenv("STACK", "prod")
        ...     get_settings.cache_clear()  # Clear cache
        ...     settings = get_settings()
        ...     assert settings.stack == "prod"
"""

from functools import lru_cache

from .config import Settings


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Settings are automatically loaded from .env file in project root.
    Using lru_cache ensures we only load settings once.

    Priority order (highest to lowest):
        1. Environment variables
        2. .env file in project root
        3. Default values from config.py

    Returns:
        Settings: Cached settings instance with validated configuration

    Note:
        In tests, call get_settings.cache_clear() after changing environment
        variables to force reload of settings.
    """
    return Settings()


# Convenience exports
__all__ = ["Settings", "get_settings"]
