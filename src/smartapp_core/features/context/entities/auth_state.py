"""Authentication state entities."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, TYPE_CHECKING

from .lifecycle import LifecycleModel, RawConfig, Text

if TYPE_CHECKING:
    from .protocols import ContextStoreProtocol


def _mask(token: Optional[str]) -> str:
    if not token:
        return "None"
    if len(token) <= 16:
        return "***"
    return f"{token[:6]}...{token[-6:]}"


@dataclass
class AuthState:
    """Credentials owned by one remote API client.
    
    The mutex is shared between every client built for the same context so
    that refreshes stay serialized when a client is replaced.
    """
    
    auth_token: Text = None
    refresh_token: Text = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = field(default=None, repr=False)
    mutex: Optional[asyncio.Lock] = field(default=None, repr=False, compare=False)
    
    def __repr__(self) -> str:
        return (
            f"AuthState(auth_token='{_mask(self.auth_token)}', "
            f"refresh_token='{_mask(self.refresh_token)}', client_id={self.client_id!r})"
        )


@dataclass
class ApiClientOptions:
    """Everything a remote API client needs to be constructed."""
    
    auth: AuthState
    api_url: str
    refresh_url: str
    installed_app_id: Text = None
    location_id: Text = None
    context_store: Optional["ContextStoreProtocol"] = None
    logger: Optional[logging.Logger] = None
    timeout_seconds: float = 30.0


class StoredContext(LifecycleModel):
    """Credential record persisted by a context store."""
    
    installed_app_id: Text = None
    location_id: Text = None
    auth_token: Text = None
    refresh_token: Text = None
    locale: Text = None
    config: RawConfig = None
    
    @classmethod
    def from_record(cls, record: Any) -> "StoredContext":
        """Accept either a model instance or a raw mapping from a store."""
        if isinstance(record, cls):
            return record
        if isinstance(record, Mapping):
            return cls.model_validate(record)
        return cls.model_validate(record, from_attributes=True)
