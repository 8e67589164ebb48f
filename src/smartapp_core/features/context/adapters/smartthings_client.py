"""SmartThings REST API client built on httpx."""

import asyncio
import json
import logging
from typing import Any, Dict, Optional

import httpx

from ....core.exceptions import ApiRequestError, TokenRefreshError
from ..entities.auth_state import ApiClientOptions, AuthState

logger = logging.getLogger(__name__)

USER_AGENT = "smartapp-core/0.1.0"


class DevicesEndpoint:
    """Device lookups under ``/devices``."""

    def __init__(self, client: "SmartThingsClient"):
        self._client = client

    async def get(self, device_id: str) -> Dict[str, Any]:
        return await self._client.request("GET", f"devices/{device_id}")

    async def get_state(self, device_id: str) -> Dict[str, Any]:
        return await self._client.request("GET", f"devices/{device_id}/status")


class SmartThingsClient:
    """API client scoped to one installed app's credentials.

    A 401 response triggers one token refresh followed by a single reissue of
    the request. Refreshes run under the shared auth mutex; a caller that
    waited on the mutex skips the refresh if the token already changed.
    """

    def __init__(
        self,
        options: ApiClientOptions,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.auth: AuthState = options.auth
        if self.auth.mutex is None:
            self.auth.mutex = asyncio.Lock()

        self.location_id = options.location_id
        self.installed_app_id = options.installed_app_id
        self.api_url = options.api_url.rstrip("/")
        self.refresh_url = options.refresh_url
        self.context_store = options.context_store
        self.timeout_seconds = options.timeout_seconds
        self.log = options.logger or logger
        self._http_client = http_client

        self.devices = DevicesEndpoint(self)

    @property
    def auth_token(self) -> Optional[str]:
        return self.auth.auth_token

    @property
    def refresh_token(self) -> Optional[str]:
        return self.auth.refresh_token

    async def _send(self, method: str, url: str, **kwargs) -> httpx.Response:
        try:
            if self._http_client is not None:
                return await self._http_client.request(method, url, **kwargs)
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                return await client.request(method, url, **kwargs)
        except httpx.TimeoutException as e:
            raise ApiRequestError(
                f"Request timed out after {self.timeout_seconds} seconds", url=url
            ) from e
        except httpx.RequestError as e:
            raise ApiRequestError(f"Request to {url} failed: {e}", url=url) from e

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {token}",
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Any] = None,
    ) -> Any:
        """Send an authenticated request and return the decoded JSON body.

        Args:
            method: HTTP method
            path: Path relative to the API base URL
            params: Optional query parameters
            body: Optional JSON body

        Returns:
            Decoded response body, or an empty dict for empty responses

        Raises:
            ApiRequestError: When the request fails or returns an error status
            TokenRefreshError: When a 401 could not be recovered by refreshing
        """
        url = f"{self.api_url}/{path.lstrip('/')}"
        token = self.auth.auth_token

        response = await self._send(method, url, params=params, json=body, headers=self._headers(token))
        if response.status_code == 401 and self.auth.refresh_token:
            self.log.debug(f"Access token rejected for {url}, refreshing")
            await self.refresh_tokens(stale_token=token)
            response = await self._send(
                method, url, params=params, json=body, headers=self._headers(self.auth.auth_token)
            )

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise ApiRequestError(
                f"{method} {url} failed with status {e.response.status_code}",
                status_code=e.response.status_code,
                url=url,
                details={"response_text": e.response.text},
            ) from e

        if not response.content:
            return {}
        try:
            return response.json()
        except (json.JSONDecodeError, ValueError) as e:
            raise ApiRequestError(
                f"{method} {url} returned a non-JSON body",
                status_code=response.status_code,
                url=url,
            ) from e

    async def refresh_tokens(self, stale_token: Optional[str] = None) -> None:
        """Exchange the refresh token for new tokens.

        Args:
            stale_token: Access token the caller saw rejected. When another
                caller has already replaced it, no refresh is issued.
        """
        async with self.auth.mutex:
            if stale_token is not None and self.auth.auth_token != stale_token:
                self.log.debug("Token already refreshed by a concurrent request")
                return

            if not self.auth.refresh_token:
                raise TokenRefreshError("No refresh token available")

            form = {
                "grant_type": "refresh_token",
                "client_id": self.auth.client_id or "",
                "refresh_token": self.auth.refresh_token,
            }
            basic_auth = None
            if self.auth.client_id and self.auth.client_secret:
                basic_auth = (self.auth.client_id, self.auth.client_secret)

            try:
                response = await self._send(
                    "POST",
                    self.refresh_url,
                    data=form,
                    auth=basic_auth,
                    headers={"Accept": "application/json", "User-Agent": USER_AGENT},
                )
                response.raise_for_status()
                tokens = response.json()
            except ApiRequestError as e:
                raise TokenRefreshError(f"Token refresh failed: {e.message}") from e
            except httpx.HTTPStatusError as e:
                raise TokenRefreshError(
                    f"Token refresh failed with status {e.response.status_code}",
                    details={"status_code": e.response.status_code},
                ) from e
            except (json.JSONDecodeError, ValueError) as e:
                raise TokenRefreshError("Token refresh returned a non-JSON body") from e

            access_token = tokens.get("access_token")
            if not access_token:
                raise TokenRefreshError("Token refresh response has no access_token")

            self.auth.auth_token = access_token
            self.auth.refresh_token = tokens.get("refresh_token") or self.auth.refresh_token
            self.log.debug(f"Refreshed tokens for installed app {self.installed_app_id}")

            if self.context_store is not None and self.installed_app_id:
                await self.context_store.update(
                    self.installed_app_id,
                    {
                        "authToken": self.auth.auth_token,
                        "refreshToken": self.auth.refresh_token,
                    },
                )
