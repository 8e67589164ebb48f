"""SmartApp entity binding settings to runtime collaborators."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Optional

from ....config.settings import SmartAppSettings, get_settings
from .protocols import ClientFactory, ContextStoreProtocol, LocalizationInitializerProtocol


@dataclass
class SmartApp:
    """Static settings of the application that owns each execution context.
    
    ``client_factory`` and ``localization_initializer`` fall back to the
    bundled httpx client and babel initializer when left unset.
    """
    
    settings: SmartAppSettings = field(default_factory=get_settings)
    context_store: Optional[ContextStoreProtocol] = None
    api_mutex: Optional[asyncio.Lock] = None
    client_factory: Optional[ClientFactory] = None
    localization_initializer: Optional[LocalizationInitializerProtocol] = None
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("smartapp_core"))
    
    @property
    def localization_enabled(self) -> bool:
        return self.settings.localization_enabled
    
    @property
    def client_id(self) -> Optional[str]:
        return self.settings.client_id
    
    @property
    def client_secret(self) -> Optional[str]:
        return self.settings.client_secret_value()
    
    @property
    def api_url(self) -> str:
        return self.settings.api_url
    
    @property
    def refresh_url(self) -> str:
        return self.settings.refresh_url
