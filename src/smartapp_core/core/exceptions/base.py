"""Base exceptions for smartapp-core.

This module defines the base exception hierarchy for the smartapp-core library.
All exceptions inherit from SmartAppError and carry an error code and a
details mapping so callers can report failures as structured data.
"""

from typing import Any, Dict, Optional


class SmartAppError(Exception):
    """Base exception for all smartapp-core errors.
    
    All exceptions in the smartapp-core library inherit from this base class
    and include structured error information for better debugging.
    """
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        *args,
        **kwargs
    ):
        super().__init__(message, *args, **kwargs)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}


class ConfigEntryTypeError(SmartAppError):
    """Raised when a config key holds entries of a different kind than requested."""
    
    def __init__(self, name: str, expected: str, actual: str):
        super().__init__(
            f"Config key '{name}' holds {actual} entries, not {expected}",
            details={"name": name, "expected": expected, "actual": actual},
        )
