"""Normalization of lifecycle payloads into one uniform record."""

import logging
from dataclasses import dataclass, field
from typing import Any, MutableMapping, Optional, assert_never

from ..entities.config_entry import ConfigMap, parse_config
from ..entities.lifecycle import (
    ClientDetails,
    coerce_text,
    ConfigurationLifecycle,
    EventLifecycle,
    ExecuteLifecycle,
    InstallLifecycle,
    Lifecycle,
    LifecycleEvent,
    ProactiveLifecycle,
    UninstallLifecycle,
    UpdateLifecycle,
    parse_lifecycle_payload,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizedLifecycle:
    """Context fields and credentials extracted from one payload."""

    lifecycle: Lifecycle
    execution_id: str
    installed_app_id: Optional[str]
    location_id: Optional[str]
    locale: Optional[str]
    config: ConfigMap = field(default_factory=dict)
    auth_token: Optional[str] = None
    refresh_token: Optional[str] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.auth_token)


def _client_locale(client: Optional[ClientDetails], fallback: Optional[str]) -> Optional[str]:
    if client is not None and client.language:
        return client.language
    return fallback


class LifecycleNormalizer:
    """Map any supported payload shape onto a :class:`NormalizedLifecycle`.

    | lifecycle     | credentials     | identifiers from             | locale from                   |
    |---------------|-----------------|------------------------------|-------------------------------|
    | EVENT         | auth token      | eventData.installedApp       | locale                        |
    | INSTALL       | auth + refresh  | installData.installedApp     | client.language, locale       |
    | UPDATE        | auth + refresh  | updateData.installedApp      | client.language, locale       |
    | CONFIGURATION | none            | configurationData            | client.language, locale       |
    | UNINSTALL     | none            | uninstallData.installedApp   | none                          |
    | EXECUTE       | auth token      | executeData.installedApp     | executeData.parameters.locale |
    | PROACTIVE     | root, if given  | payload root                 | locale                        |
    """

    def parse(self, data: MutableMapping[str, Any]) -> LifecycleEvent:
        return parse_lifecycle_payload(data)

    def normalize(self, data: MutableMapping[str, Any]) -> NormalizedLifecycle:
        """Normalize a raw payload.

        UPDATE payloads have their ``client`` entry removed from ``data``
        once the locale has been read from it.
        """
        payload = self.parse(data)
        execution_id = payload.execution_id or ""

        match payload:
            case EventLifecycle():
                app = payload.event_data.installed_app
                result = NormalizedLifecycle(
                    lifecycle=payload.kind,
                    execution_id=execution_id,
                    installed_app_id=app.installed_app_id,
                    location_id=app.location_id,
                    locale=payload.locale,
                    config=parse_config(app.config),
                    auth_token=payload.event_data.auth_token,
                )

            case InstallLifecycle():
                install = payload.install_data
                result = NormalizedLifecycle(
                    lifecycle=payload.kind,
                    execution_id=execution_id,
                    installed_app_id=install.installed_app.installed_app_id,
                    location_id=install.installed_app.location_id,
                    locale=_client_locale(payload.client, payload.locale),
                    config=parse_config(install.installed_app.config),
                    auth_token=install.auth_token,
                    refresh_token=install.refresh_token,
                )

            case UpdateLifecycle():
                update = payload.update_data
                result = NormalizedLifecycle(
                    lifecycle=payload.kind,
                    execution_id=execution_id,
                    installed_app_id=update.installed_app.installed_app_id,
                    location_id=update.installed_app.location_id,
                    locale=_client_locale(payload.client, payload.locale),
                    config=parse_config(update.installed_app.config),
                    auth_token=update.auth_token,
                    refresh_token=update.refresh_token,
                )
                data.pop("client", None)

            case ConfigurationLifecycle():
                configuration = payload.configuration_data
                result = NormalizedLifecycle(
                    lifecycle=payload.kind,
                    execution_id=execution_id,
                    installed_app_id=configuration.installed_app_id,
                    location_id=configuration.location_id,
                    locale=_client_locale(payload.client, payload.locale),
                    config=parse_config(configuration.config),
                )

            case UninstallLifecycle():
                app = payload.uninstall_data.installed_app
                result = NormalizedLifecycle(
                    lifecycle=payload.kind,
                    execution_id=execution_id,
                    installed_app_id=app.installed_app_id,
                    location_id=app.location_id,
                    locale=None,
                )

            case ExecuteLifecycle():
                execute = payload.execute_data
                result = NormalizedLifecycle(
                    lifecycle=payload.kind,
                    execution_id=execution_id,
                    installed_app_id=execute.installed_app.installed_app_id,
                    location_id=execute.installed_app.location_id,
                    locale=coerce_text(execute.parameters.get("locale")),
                    config=parse_config(execute.installed_app.config),
                    auth_token=execute.auth_token,
                )

            case ProactiveLifecycle():
                result = NormalizedLifecycle(
                    lifecycle=payload.kind,
                    execution_id="",
                    installed_app_id=payload.installed_app_id,
                    location_id=payload.location_id,
                    locale=payload.locale,
                    config=parse_config(payload.config),
                    auth_token=payload.auth_token,
                    refresh_token=payload.refresh_token,
                )

            case _:
                assert_never(payload)

        logger.debug(
            f"Normalized {result.lifecycle.value} payload for installed app {result.installed_app_id}"
        )
        return result
