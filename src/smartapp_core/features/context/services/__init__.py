"""Services for the execution context feature."""

from .config_accessor import (
    ConfigAccessor,
    INVALID_DATE,
    InvalidDate,
    is_valid_date,
    to_date,
    to_number,
)
from .lifecycle_normalizer import LifecycleNormalizer, NormalizedLifecycle
from .token_manager import ApiClientSlot, TokenManager
from .device_enrichment import DeviceEnricher
from .execution_context import ExecutionContext, create_execution_context

__all__ = [
    "ConfigAccessor",
    "INVALID_DATE",
    "InvalidDate",
    "is_valid_date",
    "to_date",
    "to_number",
    "LifecycleNormalizer",
    "NormalizedLifecycle",
    "ApiClientSlot",
    "TokenManager",
    "DeviceEnricher",
    "ExecutionContext",
    "create_execution_context",
]
