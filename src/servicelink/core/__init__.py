"""Core modules for servicelink - centralized error definitions."""

from servicelink.core.errors import (
    ConfigurationError,
    ExitCode,
    LoaderError,
    ProviderError,
    ServiceLinkError,
    ValidationError,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "ServiceLinkError",
    "ConfigurationError",
    "ProviderError",
    "LoaderError",
    "ValidationError",
    "main_with_error_handling",
]
