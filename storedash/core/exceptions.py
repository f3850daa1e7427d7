"""
Custom exceptions for storedash.

Provides a hierarchy of exceptions for better error handling and debugging.
HTTP transport and status errors are not wrapped: they surface to callers as
the ``httpx`` exceptions raised by the client.
"""

from typing import Any, Dict, Optional


class StoreDashError(Exception):
    """Base exception for all storedash errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(StoreDashError):
    """Raised when there are configuration issues."""
    pass


class AuthenticationError(StoreDashError):
    """Base class for authentication errors."""
    pass


class TokenResolutionError(AuthenticationError):
    """The token getter failed and the failure policy forbids degrading."""

    def __init__(self, message: str, cause: Optional[BaseException] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.cause = cause


class NotSignedInError(AuthenticationError):
    """The identity provider reports no signed-in user."""
    pass


class OrderStateError(StoreDashError):
    """The requested order transition is not allowed from its current status."""
    pass
