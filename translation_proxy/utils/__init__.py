"""
Utilities package for the translation proxy.
"""

from .logging import (
    TranslationLogger,
    api_logger,
    proxy_logger,
    status_logger
)

from .exceptions import (
    TranslationProxyException,
    ValidationError,
    AuthenticationError,
    NotFoundError,
    UpstreamError,
    ProbeError,
    DatabaseError,
    ConfigurationError,
    create_error_response
)

__all__ = [
    "TranslationLogger",
    "api_logger",
    "proxy_logger",
    "status_logger",
    "TranslationProxyException",
    "ValidationError",
    "AuthenticationError",
    "NotFoundError",
    "UpstreamError",
    "ProbeError",
    "DatabaseError",
    "ConfigurationError",
    "create_error_response"
]
