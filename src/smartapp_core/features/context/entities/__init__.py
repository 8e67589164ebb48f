"""Entities for the execution context feature."""

from .lifecycle import (
    Lifecycle,
    LifecycleEvent,
    LifecyclePayload,
    EventLifecycle,
    InstallLifecycle,
    UpdateLifecycle,
    ConfigurationLifecycle,
    UninstallLifecycle,
    ExecuteLifecycle,
    ProactiveLifecycle,
    ClientDetails,
    InstalledApp,
    parse_lifecycle_payload,
    resolve_lifecycle,
)
from .config_entry import (
    ConfigEntry,
    ConfigMap,
    ConfigValueType,
    StringConfigEntry,
    ModeConfigEntry,
    DeviceConfigEntry,
    parse_config,
    parse_config_entry,
)
from .device import DeviceRecord, DeviceRecordWithState
from .auth_state import AuthState, ApiClientOptions, StoredContext
from .protocols import (
    ClientFactory,
    ContextStoreProtocol,
    DevicesEndpointProtocol,
    LocalizationInitializerProtocol,
    RemoteApiClientProtocol,
)
from .smart_app import SmartApp

__all__ = [
    "Lifecycle",
    "LifecycleEvent",
    "LifecyclePayload",
    "EventLifecycle",
    "InstallLifecycle",
    "UpdateLifecycle",
    "ConfigurationLifecycle",
    "UninstallLifecycle",
    "ExecuteLifecycle",
    "ProactiveLifecycle",
    "ClientDetails",
    "InstalledApp",
    "parse_lifecycle_payload",
    "resolve_lifecycle",
    "ConfigEntry",
    "ConfigMap",
    "ConfigValueType",
    "StringConfigEntry",
    "ModeConfigEntry",
    "DeviceConfigEntry",
    "parse_config",
    "parse_config_entry",
    "DeviceRecord",
    "DeviceRecordWithState",
    "AuthState",
    "ApiClientOptions",
    "StoredContext",
    "ClientFactory",
    "ContextStoreProtocol",
    "DevicesEndpointProtocol",
    "LocalizationInitializerProtocol",
    "RemoteApiClientProtocol",
    "SmartApp",
]
