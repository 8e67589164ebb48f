"""Lifecycle payload entities.

Inbound SmartApp requests arrive in one of several shapes, selected by the
``lifecycle`` field (or ``messageType`` on older payloads). Each shape is
modelled as its own pydantic model so callers can match on the type. Anything
unrecognized is read as a proactive payload, with identifiers taken from the
payload root.

Only the fields the context reads are modelled. They tolerate nulls and odd
types: a section that is not an object reads as empty and an identifier that
is not a string or number reads as None.
"""

from enum import Enum
from typing import Annotated, Any, ClassVar, Dict, Mapping, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Lifecycle(str, Enum):
    """Lifecycle discriminator values."""
    EVENT = "EVENT"
    INSTALL = "INSTALL"
    UPDATE = "UPDATE"
    CONFIGURATION = "CONFIGURATION"
    UNINSTALL = "UNINSTALL"
    EXECUTE = "EXECUTE"
    PROACTIVE = "PROACTIVE"


def coerce_text(value: Any) -> Optional[str]:
    """Read a scalar payload field as text; anything else becomes None."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return None


def _section(value: Any) -> Any:
    if isinstance(value, (BaseModel, Mapping)):
        return value
    return {}


def _optional_section(value: Any) -> Any:
    if isinstance(value, (BaseModel, Mapping)):
        return value
    return None


def _optional_mapping(value: Any) -> Optional[Dict[str, Any]]:
    return dict(value) if isinstance(value, Mapping) else None


Text = Annotated[Optional[str], BeforeValidator(coerce_text)]
RawConfig = Annotated[Optional[Dict[str, Any]], BeforeValidator(_optional_mapping)]


class LifecycleModel(BaseModel):
    """Base model reading camelCase payload keys and ignoring unknown ones."""
    
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class InstalledApp(LifecycleModel):
    installed_app_id: Text = None
    location_id: Text = None
    config: RawConfig = None


class ClientDetails(LifecycleModel):
    """Details of the mobile client that triggered the request."""
    
    language: Text = None


InstalledAppSection = Annotated[InstalledApp, BeforeValidator(_section)]
ClientSection = Annotated[Optional[ClientDetails], BeforeValidator(_optional_section)]


class EventData(LifecycleModel):
    auth_token: Text = None
    installed_app: InstalledAppSection = Field(default_factory=InstalledApp)


class InstallData(LifecycleModel):
    auth_token: Text = None
    refresh_token: Text = None
    installed_app: InstalledAppSection = Field(default_factory=InstalledApp)


class UpdateData(InstallData):
    pass


class ConfigurationData(LifecycleModel):
    installed_app_id: Text = None
    location_id: Text = None
    config: RawConfig = None


class UninstallData(LifecycleModel):
    installed_app: InstalledAppSection = Field(default_factory=InstalledApp)


class ExecuteData(LifecycleModel):
    auth_token: Text = None
    installed_app: InstalledAppSection = Field(default_factory=InstalledApp)
    parameters: Annotated[Dict[str, Any], BeforeValidator(_section)] = Field(default_factory=dict)


class LifecyclePayload(LifecycleModel):
    """Fields common to every lifecycle request."""
    
    kind: ClassVar[Lifecycle]
    
    execution_id: Text = None
    locale: Text = None


class EventLifecycle(LifecyclePayload):
    kind: ClassVar[Lifecycle] = Lifecycle.EVENT
    
    event_data: Annotated[EventData, BeforeValidator(_section)] = Field(default_factory=EventData)


class InstallLifecycle(LifecyclePayload):
    kind: ClassVar[Lifecycle] = Lifecycle.INSTALL
    
    client: ClientSection = None
    install_data: Annotated[InstallData, BeforeValidator(_section)] = Field(default_factory=InstallData)


class UpdateLifecycle(LifecyclePayload):
    kind: ClassVar[Lifecycle] = Lifecycle.UPDATE
    
    client: ClientSection = None
    update_data: Annotated[UpdateData, BeforeValidator(_section)] = Field(default_factory=UpdateData)


class ConfigurationLifecycle(LifecyclePayload):
    kind: ClassVar[Lifecycle] = Lifecycle.CONFIGURATION
    
    client: ClientSection = None
    configuration_data: Annotated[ConfigurationData, BeforeValidator(_section)] = Field(
        default_factory=ConfigurationData
    )


class UninstallLifecycle(LifecyclePayload):
    kind: ClassVar[Lifecycle] = Lifecycle.UNINSTALL
    
    uninstall_data: Annotated[UninstallData, BeforeValidator(_section)] = Field(default_factory=UninstallData)


class ExecuteLifecycle(LifecyclePayload):
    kind: ClassVar[Lifecycle] = Lifecycle.EXECUTE
    
    execute_data: Annotated[ExecuteData, BeforeValidator(_section)] = Field(default_factory=ExecuteData)


class ProactiveLifecycle(LifecyclePayload):
    """Context built for API calls made outside of a lifecycle request.
    
    Also used for any discriminator this library does not recognize.
    """
    
    kind: ClassVar[Lifecycle] = Lifecycle.PROACTIVE
    
    auth_token: Text = None
    refresh_token: Text = None
    installed_app_id: Text = None
    location_id: Text = None
    config: RawConfig = None


LifecycleEvent = Union[
    EventLifecycle,
    InstallLifecycle,
    UpdateLifecycle,
    ConfigurationLifecycle,
    UninstallLifecycle,
    ExecuteLifecycle,
    ProactiveLifecycle,
]

PAYLOAD_TYPES: Dict[Lifecycle, type] = {
    Lifecycle.EVENT: EventLifecycle,
    Lifecycle.INSTALL: InstallLifecycle,
    Lifecycle.UPDATE: UpdateLifecycle,
    Lifecycle.CONFIGURATION: ConfigurationLifecycle,
    Lifecycle.UNINSTALL: UninstallLifecycle,
    Lifecycle.EXECUTE: ExecuteLifecycle,
    Lifecycle.PROACTIVE: ProactiveLifecycle,
}


def resolve_lifecycle(data: Mapping[str, Any]) -> Lifecycle:
    """Read the discriminator, defaulting to PROACTIVE when unrecognized."""
    name = data.get("lifecycle") or data.get("messageType")
    try:
        return Lifecycle(name)
    except ValueError:
        return Lifecycle.PROACTIVE


def parse_lifecycle_payload(data: Mapping[str, Any]) -> LifecycleEvent:
    """Validate a raw payload into the model for its lifecycle."""
    return PAYLOAD_TYPES[resolve_lifecycle(data)].model_validate(data)
