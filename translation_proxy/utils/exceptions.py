"""
Custom exceptions for the translation proxy.
"""

from typing import Optional, Dict, Any


class TranslationProxyException(Exception):
    """Base exception for translation proxy errors."""

    def __init__(self, message: str, error_code: str = None, details: Any = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or "SYSTEM_ERROR"
        self.details = details


class ValidationError(TranslationProxyException):
    """Exception for request validation errors."""

    def __init__(self, message: str = "Missing required fields", field: str = None, details: Any = None):
        super().__init__(message, "VALIDATION_ERROR", details)
        self.field = field


class AuthenticationError(TranslationProxyException):
    """Exception for authentication failures."""

    def __init__(self, message: str = "Authentication failed", details: Any = None):
        super().__init__(message, "AUTHENTICATION_ERROR", details)


class NotFoundError(TranslationProxyException):
    """Exception for lookups of records that do not exist or are not visible to the caller."""

    def __init__(self, resource: str, resource_id: str, details: Any = None):
        message = f"{resource} not found: {resource_id}"
        super().__init__(message, "NOT_FOUND", details)
        self.resource = resource
        self.resource_id = resource_id


class UpstreamError(TranslationProxyException):
    """Exception for failed or malformed replies from the inference endpoint."""

    def __init__(self, message: str = "Translation failed", model_id: str = None,
                 status_code: Optional[int] = None, details: Any = None):
        super().__init__(message, "UPSTREAM_ERROR", details)
        self.model_id = model_id
        self.status_code = status_code


class ProbeError(TranslationProxyException):
    """Exception for a single model availability probe."""

    def __init__(self, model_id: str, message: str = None, details: Any = None):
        message = message or f"Failed to fetch model status: {model_id}"
        super().__init__(message, "PROBE_ERROR", details)
        self.model_id = model_id


class DatabaseError(TranslationProxyException):
    """Exception for database operations."""

    def __init__(self, message: str, operation: str = None, details: Any = None):
        super().__init__(message, "DATABASE_ERROR", details)
        self.operation = operation


class ConfigurationError(TranslationProxyException):
    """Exception for configuration errors."""

    def __init__(self, message: str, config_key: str = None, details: Any = None):
        super().__init__(message, "CONFIGURATION_ERROR", details)
        self.config_key = config_key


def create_error_response(exception: TranslationProxyException, include_details: bool = True) -> Dict[str, Any]:
    """Create standardized error response from exception."""
    response = {
        "error": exception.message,
        "code": exception.error_code
    }

    if include_details and exception.details is not None:
        response["details"] = exception.details

    return response
