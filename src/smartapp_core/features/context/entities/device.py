"""Device projections produced by config enrichment."""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


@dataclass(frozen=True)
class DeviceRecord:
    """Device metadata tagged with the component selected in config."""
    
    device_id: str
    name: Optional[str]
    label: Optional[str]
    component_id: str
    
    @classmethod
    def from_api(cls, device: Mapping[str, Any], component_id: str) -> "DeviceRecord":
        """Build a record from a ``GET /devices/{id}`` response."""
        return cls(
            device_id=device.get("deviceId"),
            name=device.get("name"),
            label=device.get("label"),
            component_id=component_id,
        )


@dataclass(frozen=True)
class DeviceRecordWithState(DeviceRecord):
    """Device metadata plus the status of the selected component."""
    
    state: Optional[Dict[str, Any]] = field(default=None)
    
    @classmethod
    def from_record(
        cls, record: DeviceRecord, status: Mapping[str, Any]
    ) -> "DeviceRecordWithState":
        """Attach the component state from a ``GET /devices/{id}/status`` response."""
        components = status.get("components") or {}
        return cls(
            device_id=record.device_id,
            name=record.name,
            label=record.label,
            component_id=record.component_id,
            state=components.get(record.component_id),
        )
