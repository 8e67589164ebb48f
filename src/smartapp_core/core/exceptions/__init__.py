"""Exception hierarchy for smartapp-core."""

from .base import SmartAppError, ConfigEntryTypeError
from .auth import AuthenticationError, NotAuthenticatedError, TokenRefreshError
from .api import ApiRequestError

__all__ = [
    "SmartAppError",
    "ConfigEntryTypeError",
    "AuthenticationError",
    "NotAuthenticatedError",
    "TokenRefreshError",
    "ApiRequestError",
]
