"""Pytest configuration and fixtures for smartapp-core tests."""

import copy
from typing import Any, Dict, Optional
from unittest.mock import AsyncMock

import pytest

from smartapp_core.config import SmartAppSettings
from smartapp_core.features.context import ApiClientOptions, SmartApp


SAMPLE_CONFIG: Dict[str, Any] = {
    "threshold": [{"valueType": "STRING", "stringConfig": {"value": "72"}}],
    "enabled": [{"valueType": "STRING", "stringConfig": {"value": "true"}}],
    "disabled": [{"valueType": "STRING", "stringConfig": {"value": "false"}}],
    "startTime": [{"valueType": "STRING", "stringConfig": {"value": "2019-03-18T14:05:00.000Z"}}],
    "modes": [
        {"valueType": "MODE", "modeConfig": {"modeId": "mode-home"}},
        {"valueType": "MODE", "modeConfig": {"modeId": "mode-away"}},
        {"valueType": "MODE", "modeConfig": {"modeId": "mode-night"}},
    ],
    "switches": [
        {"valueType": "DEVICE", "deviceConfig": {"deviceId": "dev-1", "componentId": "main"}},
        {"valueType": "DEVICE", "deviceConfig": {"deviceId": "dev-2", "componentId": "outlet"}},
    ],
}


def installed_app(installed_app_id: str = "app-1", location_id: str = "loc-1") -> Dict[str, Any]:
    return {
        "installedAppId": installed_app_id,
        "locationId": location_id,
        "config": copy.deepcopy(SAMPLE_CONFIG),
    }


def make_payload(lifecycle: str, /, **overrides) -> Dict[str, Any]:
    """Build a representative payload for a lifecycle."""
    payloads = {
        "EVENT": {
            "lifecycle": "EVENT",
            "executionId": "exec-event",
            "locale": "en-US",
            "eventData": {
                "authToken": "event-token",
                "installedApp": installed_app(),
                "events": [{"eventType": "DEVICE_EVENT"}],
            },
        },
        "INSTALL": {
            "lifecycle": "INSTALL",
            "executionId": "exec-install",
            "locale": "en-US",
            "client": {"os": "ios", "language": "fr-FR"},
            "installData": {
                "authToken": "install-token",
                "refreshToken": "install-refresh",
                "installedApp": installed_app(),
            },
        },
        "UPDATE": {
            "lifecycle": "UPDATE",
            "executionId": "exec-update",
            "locale": "en-US",
            "client": {"os": "android", "language": "de-DE"},
            "updateData": {
                "authToken": "update-token",
                "refreshToken": "update-refresh",
                "installedApp": installed_app(),
                "previousConfig": {},
            },
        },
        "CONFIGURATION": {
            "lifecycle": "CONFIGURATION",
            "executionId": "exec-config",
            "locale": "en-US",
            "client": {"language": "es-ES"},
            "configurationData": {
                "installedAppId": "app-1",
                "locationId": "loc-1",
                "phase": "PAGE",
                "pageId": "1",
                "config": copy.deepcopy(SAMPLE_CONFIG),
            },
        },
        "UNINSTALL": {
            "lifecycle": "UNINSTALL",
            "executionId": "exec-uninstall",
            "locale": "en-US",
            "uninstallData": {"installedApp": installed_app()},
        },
        "EXECUTE": {
            "lifecycle": "EXECUTE",
            "executionId": "exec-execute",
            "locale": "en-US",
            "executeData": {
                "authToken": "execute-token",
                "installedApp": installed_app(),
                "parameters": {"locale": "it-IT"},
            },
        },
        "PROACTIVE": {
            "authToken": "proactive-token",
            "refreshToken": "proactive-refresh",
            "installedAppId": "app-1",
            "locationId": "loc-1",
            "locale": "en-GB",
            "config": copy.deepcopy(SAMPLE_CONFIG),
        },
    }
    payload = payloads[lifecycle]
    payload.update(overrides)
    return payload


class FakeDevices:
    """Devices endpoint returning canned responses."""

    def __init__(self, devices: Optional[Dict[str, Any]] = None, states: Optional[Dict[str, Any]] = None):
        self.devices = devices or {}
        self.states = states or {}
        self.calls = []

    async def get(self, device_id: str) -> Dict[str, Any]:
        self.calls.append(("get", device_id))
        return self.devices[device_id]

    async def get_state(self, device_id: str) -> Dict[str, Any]:
        self.calls.append(("get_state", device_id))
        return self.states[device_id]


class FakeApiClient:
    """Remote API client recording the options it was built with."""

    instances = []

    def __init__(self, options: ApiClientOptions):
        self.options = options
        self.auth = options.auth
        self.location_id = options.location_id
        self.devices = FakeDevices()
        FakeApiClient.instances.append(self)

    @property
    def auth_token(self) -> Optional[str]:
        return self.auth.auth_token


@pytest.fixture(autouse=True)
def reset_fake_clients():
    FakeApiClient.instances = []
    yield
    FakeApiClient.instances = []


@pytest.fixture
def settings():
    """Settings pointing at test endpoints."""
    return SmartAppSettings(
        client_id="client-id",
        client_secret="client-secret",
        api_url="https://api.example.com/v1",
        refresh_url="https://auth.example.com/oauth/token",
    )


@pytest.fixture
def app(settings):
    """SmartApp using the fake API client and no context store."""
    return SmartApp(settings=settings, client_factory=FakeApiClient)


@pytest.fixture
def mock_context_store():
    """Mock context store for testing."""
    store = AsyncMock()
    store.get = AsyncMock(return_value=None)
    store.put = AsyncMock()
    store.update = AsyncMock()
    store.delete = AsyncMock()
    return store


@pytest.fixture
def device_responses():
    return {
        "dev-1": {"deviceId": "dev-1", "name": "Switch One", "label": "Porch"},
        "dev-2": {"deviceId": "dev-2", "name": "Switch Two", "label": "Kitchen"},
    }


@pytest.fixture
def state_responses():
    return {
        "dev-1": {"components": {"main": {"switch": {"switch": {"value": "on"}}}}},
        "dev-2": {
            "components": {
                "main": {"switch": {"switch": {"value": "off"}}},
                "outlet": {"switch": {"switch": {"value": "on"}}},
            }
        },
    }
