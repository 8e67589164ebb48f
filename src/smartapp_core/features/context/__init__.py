"""Execution context feature - one inbound SmartApp request, normalized.

This module turns a raw lifecycle payload into an execution context:
- Lifecycle normalization for EVENT, INSTALL, UPDATE, CONFIGURATION,
  UNINSTALL, EXECUTE and proactive payloads
- API client construction and stored-token restoration
- Typed config accessors (string, boolean, number, date, time, modes)
- Concurrent device enrichment from device config entries

Key Components:
- ExecutionContext: Per-request context and entry point for accessors
- LifecycleNormalizer: Payload shape dispatch
- TokenManager / ApiClientSlot: Client lifecycle with a shared refresh mutex
- ConfigAccessor: Config value coercion
- DeviceEnricher: Fan-out device lookups
- SmartThingsClient / MemoryContextStore: Default collaborators

Usage Example:
```python
from smartapp_core.features.context import (
    MemoryContextStore,
    SmartApp,
    create_execution_context,
)

app = SmartApp(context_store=MemoryContextStore())

context = create_execution_context(app, payload)
threshold = context.config_number_value("threshold")
lights = await context.config_devices_with_state("lights")
```
"""

from .entities import (
    ApiClientOptions,
    AuthState,
    ConfigEntry,
    ConfigMap,
    ConfigValueType,
    ContextStoreProtocol,
    DeviceConfigEntry,
    DeviceRecord,
    DeviceRecordWithState,
    DevicesEndpointProtocol,
    Lifecycle,
    LifecycleEvent,
    LocalizationInitializerProtocol,
    ModeConfigEntry,
    RemoteApiClientProtocol,
    SmartApp,
    StoredContext,
    StringConfigEntry,
    parse_lifecycle_payload,
)
from .services import (
    ApiClientSlot,
    ConfigAccessor,
    DeviceEnricher,
    ExecutionContext,
    INVALID_DATE,
    LifecycleNormalizer,
    NormalizedLifecycle,
    TokenManager,
    create_execution_context,
    is_valid_date,
)
from .adapters import (
    AcceptLanguageInitializer,
    MemoryContextStore,
    SmartThingsClient,
)

__all__ = [
    "ApiClientOptions",
    "AuthState",
    "ConfigEntry",
    "ConfigMap",
    "ConfigValueType",
    "ContextStoreProtocol",
    "DeviceConfigEntry",
    "DeviceRecord",
    "DeviceRecordWithState",
    "DevicesEndpointProtocol",
    "Lifecycle",
    "LifecycleEvent",
    "LocalizationInitializerProtocol",
    "ModeConfigEntry",
    "RemoteApiClientProtocol",
    "SmartApp",
    "StoredContext",
    "StringConfigEntry",
    "parse_lifecycle_payload",
    "ApiClientSlot",
    "ConfigAccessor",
    "DeviceEnricher",
    "ExecutionContext",
    "INVALID_DATE",
    "LifecycleNormalizer",
    "NormalizedLifecycle",
    "TokenManager",
    "create_execution_context",
    "is_valid_date",
    "AcceptLanguageInitializer",
    "MemoryContextStore",
    "SmartThingsClient",
]
