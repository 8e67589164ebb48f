"""Adapters for the execution context feature."""

from .babel_localization import AcceptLanguageInitializer
from .memory_context_store import MemoryContextStore
from .smartthings_client import DevicesEndpoint, SmartThingsClient

__all__ = [
    "AcceptLanguageInitializer",
    "MemoryContextStore",
    "DevicesEndpoint",
    "SmartThingsClient",
]
