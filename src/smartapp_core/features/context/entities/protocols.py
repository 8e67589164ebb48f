"""Protocol interfaces for the execution context feature."""

from abc import abstractmethod
from typing import Any, Callable, Dict, Mapping, Optional, Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from ..services.execution_context import ExecutionContext
    from .auth_state import ApiClientOptions


@runtime_checkable
class DevicesEndpointProtocol(Protocol):
    """Protocol for device lookups on the remote API."""
    
    @abstractmethod
    async def get(self, device_id: str) -> Dict[str, Any]:
        """Get device metadata."""
        ...
    
    @abstractmethod
    async def get_state(self, device_id: str) -> Dict[str, Any]:
        """Get the full device status, keyed by component."""
        ...


@runtime_checkable
class RemoteApiClientProtocol(Protocol):
    """Protocol for the API client scoped to one installed app."""
    
    devices: DevicesEndpointProtocol
    location_id: Optional[str]
    
    @property
    @abstractmethod
    def auth_token(self) -> Optional[str]:
        """Current access token."""
        ...


@runtime_checkable
class ContextStoreProtocol(Protocol):
    """Protocol for persisted installed-app credentials."""
    
    @abstractmethod
    async def get(self, installed_app_id: str) -> Optional[Mapping[str, Any]]:
        """Get the stored record, or None."""
        ...
    
    @abstractmethod
    async def put(self, record: Mapping[str, Any]) -> Mapping[str, Any]:
        """Store a full record keyed by its ``installedAppId``."""
        ...
    
    @abstractmethod
    async def update(
        self, installed_app_id: str, changes: Mapping[str, Any]
    ) -> Optional[Mapping[str, Any]]:
        """Merge changes into an existing record."""
        ...
    
    @abstractmethod
    async def delete(self, installed_app_id: str) -> None:
        """Remove the stored record."""
        ...


@runtime_checkable
class LocalizationInitializerProtocol(Protocol):
    """Protocol for activating locale resources on a context."""
    
    @abstractmethod
    def initialize(self, context: "ExecutionContext", locale: str) -> None:
        """Activate locale-specific resources for the context."""
        ...


ClientFactory = Callable[["ApiClientOptions"], RemoteApiClientProtocol]
