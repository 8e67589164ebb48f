"""Tests for lifecycle payload normalization."""

import pytest

from smartapp_core.features.context import (
    DeviceConfigEntry,
    Lifecycle,
    LifecycleNormalizer,
    ModeConfigEntry,
    StringConfigEntry,
    parse_lifecycle_payload,
)
from smartapp_core.features.context.entities import (
    ConfigurationLifecycle,
    EventLifecycle,
    ProactiveLifecycle,
    UninstallLifecycle,
)
from tests.conftest import make_payload


@pytest.fixture
def normalizer():
    return LifecycleNormalizer()


class TestPayloadParsing:
    """Discriminator resolution into payload models."""

    def test_lifecycle_field_selects_model(self):
        assert isinstance(parse_lifecycle_payload(make_payload("EVENT")), EventLifecycle)
        assert isinstance(parse_lifecycle_payload(make_payload("UNINSTALL")), UninstallLifecycle)

    def test_message_type_used_when_lifecycle_missing(self):
        payload = make_payload("CONFIGURATION")
        payload["messageType"] = payload.pop("lifecycle")

        assert isinstance(parse_lifecycle_payload(payload), ConfigurationLifecycle)

    def test_unknown_discriminator_is_proactive(self):
        payload = make_payload("PROACTIVE", lifecycle="PING")

        assert isinstance(parse_lifecycle_payload(payload), ProactiveLifecycle)

    def test_missing_nested_objects_default_to_empty(self):
        payload = parse_lifecycle_payload({"lifecycle": "INSTALL"})

        assert payload.install_data.auth_token is None
        assert payload.install_data.installed_app.installed_app_id is None


class TestNormalize:
    """Field extraction per lifecycle."""

    def test_event(self, normalizer):
        result = normalizer.normalize(make_payload("EVENT", installedAppId="root-app"))

        assert result.lifecycle == Lifecycle.EVENT
        assert result.execution_id == "exec-event"
        assert result.installed_app_id == "app-1"
        assert result.location_id == "loc-1"
        assert result.locale == "en-US"
        assert result.auth_token == "event-token"
        assert result.refresh_token is None
        assert "switches" in result.config

    def test_install_prefers_client_language(self, normalizer):
        result = normalizer.normalize(make_payload("INSTALL", locationId="root-location"))

        assert result.lifecycle == Lifecycle.INSTALL
        assert result.installed_app_id == "app-1"
        assert result.location_id == "loc-1"
        assert result.locale == "fr-FR"
        assert result.auth_token == "install-token"
        assert result.refresh_token == "install-refresh"

    def test_install_falls_back_to_payload_locale(self, normalizer):
        payload = make_payload("INSTALL")
        del payload["client"]

        assert normalizer.normalize(payload).locale == "en-US"

    def test_update_reads_client_language_then_drops_client(self, normalizer):
        payload = make_payload("UPDATE")

        result = normalizer.normalize(payload)

        assert result.locale == "de-DE"
        assert result.auth_token == "update-token"
        assert result.refresh_token == "update-refresh"
        assert "client" not in payload

    def test_configuration_has_no_credentials(self, normalizer):
        result = normalizer.normalize(make_payload("CONFIGURATION"))

        assert result.lifecycle == Lifecycle.CONFIGURATION
        assert result.installed_app_id == "app-1"
        assert result.location_id == "loc-1"
        assert result.locale == "es-ES"
        assert result.auth_token is None
        assert not result.has_credentials

    def test_uninstall_has_no_credentials_config_or_locale(self, normalizer):
        result = normalizer.normalize(make_payload("UNINSTALL"))

        assert result.lifecycle == Lifecycle.UNINSTALL
        assert result.installed_app_id == "app-1"
        assert result.location_id == "loc-1"
        assert result.locale is None
        assert result.config == {}
        assert result.auth_token is None

    def test_execute_reads_locale_from_parameters(self, normalizer):
        result = normalizer.normalize(make_payload("EXECUTE"))

        assert result.lifecycle == Lifecycle.EXECUTE
        assert result.installed_app_id == "app-1"
        assert result.locale == "it-IT"
        assert result.auth_token == "execute-token"
        assert result.refresh_token is None

    def test_proactive_reads_root_fields(self, normalizer):
        result = normalizer.normalize(make_payload("PROACTIVE"))

        assert result.lifecycle == Lifecycle.PROACTIVE
        assert result.execution_id == ""
        assert result.installed_app_id == "app-1"
        assert result.location_id == "loc-1"
        assert result.locale == "en-GB"
        assert result.auth_token == "proactive-token"
        assert result.refresh_token == "proactive-refresh"

    def test_unrecognized_lifecycle_falls_back_without_raising(self, normalizer):
        payload = make_payload("PROACTIVE", lifecycle="OAUTH_CALLBACK", executionId="exec-x")

        result = normalizer.normalize(payload)

        assert result.lifecycle == Lifecycle.PROACTIVE
        assert result.execution_id == ""
        assert result.installed_app_id == "app-1"

    def test_proactive_without_credentials(self, normalizer):
        result = normalizer.normalize({"installedAppId": "app-9"})

        assert result.installed_app_id == "app-9"
        assert result.auth_token is None
        assert result.config == {}


class TestTolerantParsing:
    """Unread or oddly typed fields never fail normalization."""

    def test_unread_fields_with_other_types(self, normalizer):
        payload = make_payload("PROACTIVE", version=1, permissions=None)

        result = normalizer.normalize(payload)

        assert result.installed_app_id == "app-1"
        assert result.auth_token == "proactive-token"

    def test_null_permissions_and_events(self, normalizer):
        payload = make_payload("EVENT")
        payload["eventData"]["installedApp"]["permissions"] = None
        payload["eventData"]["events"] = None

        result = normalizer.normalize(payload)

        assert result.installed_app_id == "app-1"
        assert result.auth_token == "event-token"

    def test_null_sections_read_as_empty(self, normalizer):
        execute = normalizer.normalize(
            make_payload("EXECUTE", executeData={"authToken": "t", "installedApp": None, "parameters": None})
        )
        install = normalizer.normalize(make_payload("INSTALL", client=None, installData=None))

        assert execute.installed_app_id is None
        assert execute.locale is None
        assert execute.auth_token == "t"
        assert install.locale == "en-US"
        assert install.auth_token is None

    def test_odd_client_and_numeric_identifiers(self, normalizer):
        payload = make_payload("UPDATE", client="android", executionId=42)
        payload["updateData"]["installedApp"]["locationId"] = 7

        result = normalizer.normalize(payload)

        assert result.locale == "en-US"
        assert result.execution_id == "42"
        assert result.location_id == "7"

    def test_malformed_config_entries_are_skipped(self, normalizer):
        payload = make_payload(
            "PROACTIVE",
            config={
                "broken": None,
                "mixed": ["oops", {"stringConfig": None}, {"deviceConfig": {"deviceId": "d", "permissions": None}}],
            },
        )

        config = normalizer.normalize(payload).config

        assert config["broken"] == []
        assert config["mixed"] == [StringConfigEntry(value=None), DeviceConfigEntry(device_id="d")]


class TestConfigParsing:
    """Config entries become typed entries in order."""

    def test_entry_kinds(self, normalizer):
        config = normalizer.normalize(make_payload("EVENT")).config

        assert config["threshold"] == [StringConfigEntry(value="72")]
        assert [entry.mode_id for entry in config["modes"]] == ["mode-home", "mode-away", "mode-night"]
        assert all(isinstance(entry, ModeConfigEntry) for entry in config["modes"])
        assert config["switches"][1] == DeviceConfigEntry(device_id="dev-2", component_id="outlet")

    def test_entry_kind_from_field_without_value_type(self, normalizer):
        payload = make_payload(
            "PROACTIVE",
            config={"name": [{"stringConfig": {"value": "Porch"}}]},
        )

        assert normalizer.normalize(payload).config["name"] == [StringConfigEntry(value="Porch")]

    def test_unsupported_entry_kinds_are_skipped(self, normalizer):
        payload = make_payload(
            "PROACTIVE",
            config={"scenes": [{"valueType": "SCENE", "sceneConfig": {"sceneId": "s-1"}}]},
        )

        assert normalizer.normalize(payload).config["scenes"] == []
