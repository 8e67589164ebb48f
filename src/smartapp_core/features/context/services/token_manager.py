"""Remote API client and token lifecycle for an execution context."""

import asyncio
import logging
from typing import Optional, TYPE_CHECKING

from ..adapters.smartthings_client import SmartThingsClient
from ..entities.auth_state import ApiClientOptions, AuthState, StoredContext
from ..entities.protocols import RemoteApiClientProtocol
from ..entities.smart_app import SmartApp

if TYPE_CHECKING:
    from .execution_context import ExecutionContext

logger = logging.getLogger(__name__)


class ApiClientSlot:
    """Holds at most one remote API client for a context.

    The client is absent until credentials are known and may later be
    replaced. The mutex outlives replacements so concurrent refreshes stay
    serialized across the old and new client. The slot also owns the
    context's location id and keeps the client's copy in step with it.
    """

    def __init__(self, mutex: Optional[asyncio.Lock] = None, location_id: Optional[str] = None):
        self._client: Optional[RemoteApiClientProtocol] = None
        self._mutex = mutex
        self._location_id = location_id

    @property
    def client(self) -> Optional[RemoteApiClientProtocol]:
        return self._client

    @property
    def mutex(self) -> Optional[asyncio.Lock]:
        return self._mutex

    @property
    def location_id(self) -> Optional[str]:
        return self._location_id

    def set_location_id(self, location_id: Optional[str]) -> None:
        self._location_id = location_id
        if self._client is not None:
            self._client.location_id = location_id

    def ensure_mutex(self) -> asyncio.Lock:
        """Return the shared mutex, creating it on first use."""
        if self._mutex is None:
            self._mutex = asyncio.Lock()
        return self._mutex

    def replace(self, client: Optional[RemoteApiClientProtocol]) -> Optional[RemoteApiClientProtocol]:
        """Install a new client and return the one it replaced."""
        previous = self._client
        self._client = client
        return previous

    def is_authenticated(self) -> bool:
        return self._client is not None and bool(self._client.auth_token)


class TokenManager:
    """Builds, restores and discards credentials for one execution context.

    Persistence goes through the app's context store. Without a store the
    restore and delete operations are no-ops.
    """

    def __init__(self, app: SmartApp, slot: ApiClientSlot):
        self.app = app
        self.slot = slot

    def _options(
        self,
        context: "ExecutionContext",
        auth_token: Optional[str],
        refresh_token: Optional[str],
        mutex: Optional[asyncio.Lock],
    ) -> ApiClientOptions:
        app = self.app
        return ApiClientOptions(
            auth=AuthState(
                auth_token=auth_token,
                refresh_token=refresh_token,
                client_id=app.client_id,
                client_secret=app.client_secret,
                mutex=mutex,
            ),
            api_url=app.api_url,
            refresh_url=app.refresh_url,
            installed_app_id=context.installed_app_id,
            location_id=self.slot.location_id,
            context_store=app.context_store,
            logger=app.logger,
            timeout_seconds=app.settings.request_timeout_seconds,
        )

    def _create(self, options: ApiClientOptions) -> RemoteApiClientProtocol:
        factory = self.app.client_factory or SmartThingsClient
        return factory(options)

    def build_client(
        self,
        context: "ExecutionContext",
        auth_token: Optional[str],
        refresh_token: Optional[str] = None,
    ) -> Optional[RemoteApiClientProtocol]:
        """Build the context's client when an access token is present.

        Args:
            context: Context the client is scoped to
            auth_token: Access token from the lifecycle payload
            refresh_token: Refresh token, when the lifecycle carries one

        Returns:
            The new client, or None when there is no access token
        """
        if not auth_token:
            return None

        client = self._create(
            self._options(context, auth_token, refresh_token, self.slot.ensure_mutex())
        )
        self.slot.replace(client)
        logger.debug(f"Built API client for installed app {context.installed_app_id}")
        return client

    def is_authenticated(self) -> bool:
        return self.slot.is_authenticated()

    def set_location_id(self, location_id: Optional[str]) -> None:
        """Update the context and its client together."""
        self.slot.set_location_id(location_id)

    async def retrieve_tokens(self, context: "ExecutionContext") -> "ExecutionContext":
        """Restore stored credentials for the context's installed app.

        On a hit the stored location replaces the context's and the client is
        rebuilt with the stored tokens, reusing the existing mutex. On a miss,
        or without a context store, the context is returned unchanged.
        """
        store = self.app.context_store
        if store is None:
            return context

        record = await store.get(context.installed_app_id)
        if not record:
            logger.debug(f"No stored context for installed app {context.installed_app_id}")
            return context

        stored = StoredContext.from_record(record)
        self.slot.set_location_id(stored.location_id)

        options = self._options(
            context,
            stored.auth_token,
            stored.refresh_token,
            self.slot.ensure_mutex(),
        )
        self.slot.replace(self._create(options))
        logger.debug(f"Restored stored tokens for installed app {context.installed_app_id}")
        return context

    async def delete_context(self, context: "ExecutionContext") -> None:
        """Remove stored credentials for the context's installed app."""
        store = self.app.context_store
        if store is None:
            return

        await store.delete(context.installed_app_id)
        logger.debug(f"Deleted stored context for installed app {context.installed_app_id}")
