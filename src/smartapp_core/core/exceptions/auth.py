"""Authentication-specific exceptions for smartapp-core."""

from .base import SmartAppError


class AuthenticationError(SmartAppError):
    """Base exception for authentication errors."""
    pass


class NotAuthenticatedError(AuthenticationError):
    """Raised when an API-dependent operation runs on a context without a client."""
    pass


class TokenRefreshError(AuthenticationError):
    """Raised when exchanging a refresh token for new tokens fails."""
    pass
