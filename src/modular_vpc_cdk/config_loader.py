"""Deployment configuration loading from config.yaml."""
from pathlib import Path
from typing import Any

import pydantic
import yaml

from .config import EnvironmentConfig
from .exceptions import ConfigurationError
from .logger import log_function_call

REQUIRED_KEYS = ("network", "app")


@log_function_call()
def load_config(config_path: Path) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Loaded configuration dictionary

    Raises:
        FileNotFoundError: If config.yaml doesn't exist
        ConfigurationError: If the file is not valid YAML or is empty
    """
    if not config_path.exists():
        raise FileNotFoundError(
            f"Configuration file not found: {config_path}\n"
            f"Please create config.yaml in the project root."
        )

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file: {e}", path=str(config_path)) from e

    if not config:
        raise ConfigurationError("Configuration file is empty", path=str(config_path))

    if not isinstance(config, dict):
        raise ConfigurationError(
            "Configuration file must contain a mapping of environments",
            path=str(config_path),
        )

    return config


def validate_environment_config(config: dict[str, Any], environment: str) -> EnvironmentConfig:
    """Validate one environment section and convert it to a model.

    Args:
        config: Full configuration dictionary
        environment: Environment (stack) name, e.g. 'dev'

    Returns:
        Validated EnvironmentConfig

    Raises:
        ConfigurationError: If the section is missing or invalid
    """
    if environment not in config:
        raise ConfigurationError(
            f"Environment '{environment}' not found in config.yaml",
            available=", ".join(sorted(config)),
        )

    env_config = config[environment] or {}
    missing_keys = [key for key in REQUIRED_KEYS if key not in env_config]
    if missing_keys:
        raise ConfigurationError(
            f"Missing required configuration keys for {environment}",
            missing=", ".join(missing_keys),
            required=", ".join(REQUIRED_KEYS),
        )

    try:
        return EnvironmentConfig.model_validate(env_config)
    except pydantic.ValidationError as e:
        raise ConfigurationError(
            f"Invalid configuration for {environment}:\n{e}"
        ) from e


def load_user_data(project_root: Path, user_data_file: str) -> str:
    """Read the instance bootstrap script referenced by the app config.

    Raises:
        ConfigurationError: If the script does not exist
    """
    path = project_root / user_data_file
    if not path.is_file():
        raise ConfigurationError("User data script not found", path=str(path))
    return path.read_text()
