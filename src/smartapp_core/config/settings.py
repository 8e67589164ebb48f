"""
SmartApp settings.

Static, environment-driven settings for a SmartApp. Runtime collaborators
(context store, client factory, shared mutex) are bound separately on
:class:`smartapp_core.features.context.entities.SmartApp`.
"""
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class SmartAppSettings(BaseSettings):
    """Settings loaded from ``SMARTAPP_*`` environment variables or ``.env``."""
    
    model_config = SettingsConfigDict(
        env_prefix="SMARTAPP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )
    
    # OAuth client credentials used for token refresh
    client_id: Optional[str] = Field(default=None, description="SmartApp OAuth client id")
    client_secret: Optional[SecretStr] = Field(default=None, description="SmartApp OAuth client secret")
    
    # Remote endpoints
    api_url: str = Field(default="https://api.smartthings.com/v1")
    refresh_url: str = Field(default="https://auth-global.api.smartthings.com/oauth/token")
    request_timeout_seconds: float = Field(default=30.0, gt=0)
    
    # Localization
    localization_enabled: bool = Field(default=False)
    default_locale: str = Field(default="en-US")
    
    def client_secret_value(self) -> Optional[str]:
        """Return the unwrapped client secret, if configured."""
        if self.client_secret is None:
            return None
        return self.client_secret.get_secret_value()


@lru_cache()
def get_settings() -> SmartAppSettings:
    """Get cached settings instance."""
    return SmartAppSettings()
