"""Custom exception hierarchy and error handling patterns.

This module defines application-specific exceptions with context support.
"""

from typing import Any


class ModularVpcCdkError(Exception):
    """Base exception for the Modular VPC CDK project.

    All custom exceptions should inherit from this class.
    Supports additional context via keyword arguments.
    """

    def __init__(self, message: str, **context: Any) -> None:
        """Initialize exception with message and context.

        Args:
            message: Error message
            **context: Additional context as key-value pairs
        """
        super().__init__(message)
        self.message = message
        self.context = context

    def __str__(self) -> str:
        """String representation including context."""
        if self.context:
            ctx_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


class ValidationError(ModularVpcCdkError):
    """Raised when validation fails."""

    pass


class InsufficientZonesError(ValidationError):
    """Raised when more subnets are requested than availability zones given."""

    pass


class ConfigurationError(ModularVpcCdkError):
    """Raised when configuration is invalid."""

    pass


class ResourceCreationError(ModularVpcCdkError):
    """Raised when a resource-creation call fails during a build stage.

    The ``stage`` attribute names the phase that failed, e.g.
    ``"creating public subnets"``. The original exception is chained.
    """

    def __init__(self, message: str, stage: str, **context: Any) -> None:
        super().__init__(message, stage=stage, **context)
        self.stage = stage
