"""Remote API exceptions for smartapp-core."""

from typing import Any, Dict, Optional

from .base import SmartAppError


class ApiRequestError(SmartAppError):
    """Raised when a request to the SmartThings API fails."""
    
    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        url: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, details=details)
        self.status_code = status_code
        self.url = url
        self.details.setdefault("status_code", status_code)
        self.details.setdefault("url", url)
