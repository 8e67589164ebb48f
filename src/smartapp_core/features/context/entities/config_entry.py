"""Config entry entities.

Each installed-app config key maps to an ordered list of entries. An entry is
one of three closed kinds, discriminated by type rather than by field
presence once parsed.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Union

logger = logging.getLogger(__name__)


class ConfigValueType(str, Enum):
    """Kinds of config entry values."""
    STRING = "STRING"
    MODE = "MODE"
    DEVICE = "DEVICE"


@dataclass(frozen=True)
class StringConfigEntry:
    """Scalar config value stored as a string."""
    
    value: Optional[str] = None
    
    value_type: ClassVar[ConfigValueType] = ConfigValueType.STRING


@dataclass(frozen=True)
class ModeConfigEntry:
    """Location mode selection."""
    
    mode_id: Optional[str] = None
    
    value_type: ClassVar[ConfigValueType] = ConfigValueType.MODE


@dataclass(frozen=True)
class DeviceConfigEntry:
    """Device selection bound to one component of the device."""
    
    device_id: Optional[str] = None
    component_id: str = "main"
    permissions: tuple = ()
    
    value_type: ClassVar[ConfigValueType] = ConfigValueType.DEVICE


ConfigEntry = Union[StringConfigEntry, ModeConfigEntry, DeviceConfigEntry]

ConfigMap = Dict[str, List[ConfigEntry]]


def _body(raw: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    body = raw.get(key)
    return body if isinstance(body, Mapping) else {}


def parse_config_entry(raw: Mapping[str, Any]) -> Optional[ConfigEntry]:
    """Parse one raw config entry.
    
    The kind is taken from whichever of ``stringConfig``, ``modeConfig`` or
    ``deviceConfig`` is present, falling back to ``valueType``.
    
    Args:
        raw: Entry as delivered in a lifecycle payload
        
    Returns:
        Parsed entry, or None for kinds this library does not model
    """
    if not isinstance(raw, Mapping):
        logger.debug(f"Skipping malformed config entry: {raw!r}")
        return None
    
    value_type = raw.get("valueType")
    
    if "stringConfig" in raw or value_type == ConfigValueType.STRING.value:
        return StringConfigEntry(value=_body(raw, "stringConfig").get("value"))
    
    if "modeConfig" in raw or value_type == ConfigValueType.MODE.value:
        return ModeConfigEntry(mode_id=_body(raw, "modeConfig").get("modeId"))
    
    if "deviceConfig" in raw or value_type == ConfigValueType.DEVICE.value:
        body = _body(raw, "deviceConfig")
        permissions = body.get("permissions")
        return DeviceConfigEntry(
            device_id=body.get("deviceId"),
            component_id=body.get("componentId") or "main",
            permissions=tuple(permissions) if isinstance(permissions, list) else (),
        )
    
    logger.debug(f"Skipping unsupported config entry type: {value_type}")
    return None


def parse_config(raw: Optional[Mapping[str, Any]]) -> ConfigMap:
    """Parse a raw config map into typed entries, preserving entry order.
    
    Every key present in ``raw`` is kept, even when none of its entries
    parse, so an empty selection stays distinguishable from a missing key.
    """
    config: ConfigMap = {}
    if not raw:
        return config
    
    for name, entries in raw.items():
        if not isinstance(entries, list):
            entries = []
        parsed = []
        for entry in entries:
            item = parse_config_entry(entry)
            if item is not None:
                parsed.append(item)
        config[name] = parsed
    
    return config
