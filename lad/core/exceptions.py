"""
Custom exception classes for the Lad application.

This module defines a hierarchy of application-specific exceptions that:
- Separate startup configuration defects from send-time failures
- Map to appropriate HTTP status codes
- Include detailed error messages
- Support additional context for logging
"""

from typing import Any, Dict, Optional, Sequence
from fastapi import HTTPException, status


class LadException(HTTPException):
    """
    Base exception class for the Lad application.

    All application-specific exceptions should inherit from this class
    to ensure consistent error handling and response formatting.
    """
    def __init__(
        self,
        status_code: int,
        detail: str,
        headers: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        """
        Initialize the exception with status code, detail message, and optional context.

        Args:
            status_code: HTTP status code
            detail: Error message
            headers: Optional response headers
            context: Optional additional context for logging
        """
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.context = context or {}

    def __str__(self) -> str:
        return str(self.detail)


class ConfigurationError(LadException):
    """Raised when the runtime configuration cannot be composed."""
    def __init__(
        self,
        detail: str = "Invalid configuration",
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            context=context
        )


class DerivationError(ConfigurationError):
    """Raised when a derived field reads configuration that is not there."""
    def __init__(
        self,
        detail: str = "Derived field could not be computed",
        path: Optional[Sequence[str]] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        context = context or {}
        if path:
            context["path"] = ".".join(path)
        super().__init__(detail=detail, context=context)
        self.path = tuple(path or ())


class ExternalServiceError(LadException):
    """Raised when external service integration fails."""
    def __init__(
        self,
        detail: str = "External service error",
        service_name: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        context = context or {}
        if service_name:
            context["service_name"] = service_name
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=detail,
            context=context
        )


class StorageUploadError(ExternalServiceError):
    """Raised when an object could not be stored in the storage bucket."""
    def __init__(
        self,
        detail: str = "Object storage upload failed",
        key: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ) -> None:
        context = context or {}
        if key:
            context["key"] = key
        super().__init__(detail=detail, service_name="storage", context=context)
