"""Concurrent enrichment of device config entries."""

import asyncio
import logging
from typing import Awaitable, Iterable, List, Optional, TypeVar

from ....core.exceptions import ConfigEntryTypeError, NotAuthenticatedError
from ..entities.config_entry import ConfigMap, DeviceConfigEntry
from ..entities.device import DeviceRecord, DeviceRecordWithState
from ..entities.protocols import DevicesEndpointProtocol
from .token_manager import ApiClientSlot

logger = logging.getLogger(__name__)

T = TypeVar("T")


async def gather_all(lookups: Iterable[Awaitable[T]]) -> List[T]:
    """Run lookups concurrently and return their results in input order.

    The first failure is re-raised unchanged after the remaining lookups
    have been cancelled.
    """
    tasks = [asyncio.ensure_future(lookup) for lookup in lookups]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        raise


class DeviceEnricher:
    """Resolve device config entries into device records.

    All lookups for one call start together and the call returns once every
    lookup has finished. Results follow config order, and the first failing
    lookup fails the whole call.
    """

    def __init__(self, config: ConfigMap, slot: ApiClientSlot):
        self.config = config
        self.slot = slot

    def _device_entries(self, name: str) -> Optional[List[DeviceConfigEntry]]:
        entries = self.config.get(name)
        if entries is None:
            return None

        for entry in entries:
            if not isinstance(entry, DeviceConfigEntry):
                raise ConfigEntryTypeError(name, "DEVICE", entry.value_type.value)
        return entries

    def _devices_endpoint(self) -> DevicesEndpointProtocol:
        client = self.slot.client
        if client is None:
            raise NotAuthenticatedError("Device lookups require an authenticated context")
        return client.devices

    async def _lookup(
        self, devices: DevicesEndpointProtocol, entry: DeviceConfigEntry
    ) -> DeviceRecord:
        device = await devices.get(entry.device_id)
        return DeviceRecord.from_api(device, entry.component_id)

    async def _lookup_with_state(
        self, devices: DevicesEndpointProtocol, entry: DeviceConfigEntry
    ) -> DeviceRecordWithState:
        record = await self._lookup(devices, entry)
        status = await devices.get_state(record.device_id)
        return DeviceRecordWithState.from_record(record, status)

    async def devices(self, name: str) -> Optional[List[DeviceRecord]]:
        """Fetch metadata for every device selected under ``name``.

        Args:
            name: The config key name

        Returns:
            Device records in config order, an empty list when the key holds
            no devices, or None if the key is absent

        Raises:
            NotAuthenticatedError: When there are devices to fetch and the
                context has no API client
        """
        entries = self._device_entries(name)
        if entries is None:
            return None
        if not entries:
            return []

        devices = self._devices_endpoint()
        logger.debug(f"Fetching {len(entries)} devices for config key '{name}'")
        return await gather_all(self._lookup(devices, entry) for entry in entries)

    async def devices_with_state(self, name: str) -> Optional[List[DeviceRecordWithState]]:
        """Fetch metadata and component state for every device under ``name``.

        Each device's state lookup starts once its metadata lookup resolves.
        """
        entries = self._device_entries(name)
        if entries is None:
            return None
        if not entries:
            return []

        devices = self._devices_endpoint()
        logger.debug(f"Fetching {len(entries)} devices with state for config key '{name}'")
        return await gather_all(self._lookup_with_state(devices, entry) for entry in entries)
