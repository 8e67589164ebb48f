"""Execution context for one inbound SmartApp request."""

import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Mapping, MutableMapping, Optional, Union

from babel import Locale

from ..adapters.babel_localization import AcceptLanguageInitializer
from ..entities.auth_state import AuthState
from ..entities.config_entry import ConfigMap
from ..entities.device import DeviceRecord, DeviceRecordWithState
from ..entities.lifecycle import Lifecycle
from ..entities.protocols import RemoteApiClientProtocol
from ..entities.smart_app import SmartApp
from .config_accessor import ConfigAccessor, InvalidDate
from .device_enrichment import DeviceEnricher
from .lifecycle_normalizer import LifecycleNormalizer
from .token_manager import ApiClientSlot, TokenManager

logger = logging.getLogger(__name__)


class ExecutionContext:
    """Uniform view of one lifecycle request.

    Built once per inbound payload. Identity fields are read-only; the
    location id changes only through :meth:`set_location_id` or
    :meth:`retrieve_tokens`, which keep the API client in step.

    Example:
        ```python
        context = create_execution_context(app, payload)
        if context.is_authenticated():
            switches = await context.config_devices_with_state("switches")
        ```
    """

    def __init__(
        self,
        app: SmartApp,
        data: MutableMapping[str, Any],
        api_mutex: Optional[asyncio.Lock] = None,
        normalizer: Optional[LifecycleNormalizer] = None,
    ):
        self.app = app
        self.event = data
        self.headers: Dict[str, str] = {}
        self.babel_locale: Optional[Locale] = None

        normalized = (normalizer or LifecycleNormalizer()).normalize(data)
        self._lifecycle = normalized.lifecycle
        self._execution_id = normalized.execution_id
        self._installed_app_id = normalized.installed_app_id
        self._locale = normalized.locale
        self._config = normalized.config

        self._slot = ApiClientSlot(
            api_mutex if api_mutex is not None else app.api_mutex,
            location_id=normalized.location_id,
        )
        self._tokens = TokenManager(app, self._slot)
        self._settings = ConfigAccessor(
            self._config,
            locale=self._locale,
            default_locale=app.settings.default_locale,
        )
        self._enricher = DeviceEnricher(self._config, self._slot)

        if app.localization_enabled and self._locale:
            self.headers["accept-language"] = self._locale
            initializer = app.localization_initializer or AcceptLanguageInitializer()
            initializer.initialize(self, self._locale)

        self._tokens.build_client(self, normalized.auth_token, normalized.refresh_token)

    @classmethod
    def from_payload(
        cls,
        app: SmartApp,
        data: MutableMapping[str, Any],
        api_mutex: Optional[asyncio.Lock] = None,
    ) -> "ExecutionContext":
        return cls(app, data, api_mutex)

    # Identity

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle

    @property
    def execution_id(self) -> str:
        return self._execution_id

    @property
    def installed_app_id(self) -> Optional[str]:
        return self._installed_app_id

    @property
    def location_id(self) -> Optional[str]:
        return self._slot.location_id

    @property
    def locale(self) -> Optional[str]:
        return self._locale

    @property
    def config(self) -> ConfigMap:
        return self._config

    # Authentication

    @property
    def api(self) -> Optional[RemoteApiClientProtocol]:
        """The remote API client, or None when unauthenticated."""
        return self._slot.client

    @property
    def api_mutex(self) -> Optional[asyncio.Lock]:
        return self._slot.mutex

    @property
    def auth_state(self) -> Optional[AuthState]:
        client = self._slot.client
        if client is None:
            return None
        return getattr(client, "auth", None)

    def is_authenticated(self) -> bool:
        return self._tokens.is_authenticated()

    def set_location_id(self, location_id: Optional[str]) -> None:
        self._tokens.set_location_id(location_id)

    async def retrieve_tokens(self) -> "ExecutionContext":
        """Restore stored credentials; returns this context."""
        return await self._tokens.retrieve_tokens(self)

    async def delete_context(self) -> None:
        await self._tokens.delete_context(self)

    # Config values

    def config_string_value(self, name: str) -> Optional[str]:
        return self._settings.string_value(name)

    def config_boolean_value(self, name: str) -> bool:
        return self._settings.boolean_value(name)

    def config_number_value(self, name: str) -> Optional[float]:
        return self._settings.number_value(name)

    def config_date_value(self, name: str) -> Optional[Union[datetime, InvalidDate]]:
        return self._settings.date_value(name)

    def config_time_string(
        self, name: str, options: Optional[Mapping[str, Any]] = None
    ) -> Optional[str]:
        return self._settings.time_string(name, options)

    def config_mode_ids(self, name: str) -> Optional[List[Optional[str]]]:
        return self._settings.mode_ids(name)

    async def config_devices(self, name: str) -> Optional[List[DeviceRecord]]:
        return await self._enricher.devices(name)

    async def config_devices_with_state(
        self, name: str
    ) -> Optional[List[DeviceRecordWithState]]:
        return await self._enricher.devices_with_state(name)

    def __repr__(self) -> str:
        return (
            f"ExecutionContext(lifecycle={self._lifecycle.value}, "
            f"installed_app_id={self._installed_app_id!r}, "
            f"location_id={self.location_id!r}, authenticated={self.is_authenticated()})"
        )


def create_execution_context(
    app: SmartApp,
    data: MutableMapping[str, Any],
    api_mutex: Optional[asyncio.Lock] = None,
) -> ExecutionContext:
    """Build the execution context for one inbound payload.

    Args:
        app: Application settings and collaborators
        data: Raw lifecycle payload
        api_mutex: Lock shared by every client serving these credentials;
            defaults to ``app.api_mutex``

    Returns:
        Ready-to-use execution context
    """
    return ExecutionContext(app, data, api_mutex)
