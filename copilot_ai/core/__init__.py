"""Core configuration, logging and exceptions."""

from .config import Settings, get_settings
from .exceptions import (
    CopilotAIException,
    ConfigurationError,
    ProviderUnavailableError,
    ProviderError,
    ValidationError,
    UnknownTaskTypeError,
    InvalidRequestError,
)
from .logging import setup_logging

__all__ = [
    "Settings",
    "get_settings",
    "setup_logging",
    "CopilotAIException",
    "ConfigurationError",
    "ProviderUnavailableError",
    "ProviderError",
    "ValidationError",
    "UnknownTaskTypeError",
    "InvalidRequestError",
]
