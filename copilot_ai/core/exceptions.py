"""
Custom Exception Hierarchy for the CleanDay AI Copilot router

Provides domain-specific exceptions with structured error codes and logging
so callers can tell "feature not configured" apart from "feature failed".
"""

import logging
from typing import Optional, Dict, Any
from datetime import datetime

logger = logging.getLogger(__name__)


class CopilotAIException(Exception):
    """
    Base exception for all copilot AI errors.

    Attributes:
        error_code: Unique error identifier for logging/debugging
        message: Human-readable error message
        details: Technical details for logging
        task_type: Task being served when the error surfaced (set by the router)
        provider: Provider that was attempted (set by the router or adapter)
    """

    def __init__(
        self,
        message: str,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.timestamp = datetime.utcnow().isoformat()
        self.task_type: Optional[str] = None
        self.provider: Optional[str] = self.details.get("provider")

        logger.error(
            f"[{error_code}] {message}",
            extra={
                "error_code": error_code,
                "details": self.details,
                "timestamp": self.timestamp
            }
        )

        super().__init__(message)

    def annotate(self, task_type: Optional[Any] = None, provider: Optional[Any] = None) -> "CopilotAIException":
        """Attach routing context without changing the exception type."""
        if task_type is not None:
            self.task_type = getattr(task_type, "value", task_type)
            self.details["task_type"] = self.task_type
        if provider is not None:
            self.provider = getattr(provider, "value", provider)
            self.details["provider"] = self.provider
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "task_type": self.task_type,
            "provider": self.provider,
            "timestamp": self.timestamp
        }


# ============================================================================
# Configuration Errors
# ============================================================================

class ConfigurationError(CopilotAIException):
    """Configuration errors."""

    def __init__(
        self,
        message: str = "Configuration error",
        error_code: str = "CONFIGURATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details
        )


class ProviderUnavailableError(ConfigurationError):
    """A provider was routed to but its credential was never configured."""

    def __init__(
        self,
        provider: Any,
        credential_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        provider_name = getattr(provider, "value", provider)
        if details is None:
            details = {}
        details["provider"] = provider_name

        message = f"{provider_name} client not initialized"
        if credential_name:
            details["credential"] = credential_name
            message += f". Set {credential_name}."

        super().__init__(
            message=message,
            error_code="PROVIDER_UNAVAILABLE",
            details=details
        )


# ============================================================================
# Provider Errors
# ============================================================================

class ProviderError(CopilotAIException):
    """The vendor API rejected or failed the call."""

    def __init__(
        self,
        message: str = "Provider request failed",
        provider: Optional[Any] = None,
        model: Optional[str] = None,
        original_error: Optional[BaseException] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        if details is None:
            details = {}
        if provider is not None:
            details["provider"] = getattr(provider, "value", provider)
        if model is not None:
            details["model"] = model
        if original_error is not None:
            details["error_type"] = type(original_error).__name__
            status_code = getattr(original_error, "status_code", None)
            if status_code is not None:
                details["vendor_status_code"] = status_code

        self.model = model
        self.original_error = original_error

        super().__init__(
            message=message,
            error_code="PROVIDER_ERROR",
            details=details
        )


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(CopilotAIException):
    """Caller input errors."""

    def __init__(
        self,
        message: str = "Validation failed",
        error_code: str = "VALIDATION_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details
        )


class UnknownTaskTypeError(ValidationError):
    """Task identifier outside the closed TaskType set."""

    def __init__(
        self,
        task_type: Any,
        details: Optional[Dict[str, Any]] = None
    ):
        if details is None:
            details = {}
        details["task_type"] = repr(task_type)

        super().__init__(
            message=f"Unknown task type: {task_type!r}",
            error_code="UNKNOWN_TASK_TYPE",
            details=details
        )


class InvalidRequestError(ValidationError):
    """Malformed routing options or message history."""

    def __init__(
        self,
        message: str = "Invalid request",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(
            message=message,
            error_code="INVALID_REQUEST",
            details=details
        )
