"""smartapp-core - lifecycle context, token handling and device enrichment for SmartApps."""

from .__version__ import __version__
from .config import SmartAppSettings, get_settings, setup_logging
from .core.exceptions import (
    ApiRequestError,
    AuthenticationError,
    ConfigEntryTypeError,
    NotAuthenticatedError,
    SmartAppError,
    TokenRefreshError,
)
from .features.context import (
    ExecutionContext,
    Lifecycle,
    MemoryContextStore,
    SmartApp,
    SmartThingsClient,
    create_execution_context,
)

__all__ = [
    "__version__",
    "SmartAppSettings",
    "get_settings",
    "setup_logging",
    "ApiRequestError",
    "AuthenticationError",
    "ConfigEntryTypeError",
    "NotAuthenticatedError",
    "SmartAppError",
    "TokenRefreshError",
    "ExecutionContext",
    "Lifecycle",
    "MemoryContextStore",
    "SmartApp",
    "SmartThingsClient",
    "create_execution_context",
]
