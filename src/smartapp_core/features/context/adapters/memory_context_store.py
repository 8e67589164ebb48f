"""In-memory context store."""

import asyncio
import copy
import logging
from typing import Any, Dict, Mapping, Optional

logger = logging.getLogger(__name__)


class MemoryContextStore:
    """Context store keeping installed-app records in process memory.
    
    Records use the camelCase keys of lifecycle payloads (``installedAppId``,
    ``locationId``, ``authToken``, ``refreshToken``). Suitable for tests and
    single-process deployments; contents are lost on restart.
    """
    
    def __init__(self, records: Optional[Mapping[str, Mapping[str, Any]]] = None):
        self._records: Dict[str, Dict[str, Any]] = {
            key: dict(value) for key, value in (records or {}).items()
        }
        self._lock = asyncio.Lock()
    
    async def get(self, installed_app_id: str) -> Optional[Dict[str, Any]]:
        async with self._lock:
            record = self._records.get(installed_app_id)
            return copy.deepcopy(record) if record is not None else None
    
    async def put(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        installed_app_id = record.get("installedAppId")
        if not installed_app_id:
            raise ValueError("Context record requires an installedAppId")
        
        async with self._lock:
            self._records[installed_app_id] = copy.deepcopy(dict(record))
            logger.debug(f"Stored context for installed app {installed_app_id}")
            return copy.deepcopy(self._records[installed_app_id])
    
    async def update(
        self, installed_app_id: str, changes: Mapping[str, Any]
    ) -> Optional[Dict[str, Any]]:
        async with self._lock:
            record = self._records.get(installed_app_id)
            if record is None:
                return None
            record.update(copy.deepcopy(dict(changes)))
            return copy.deepcopy(record)
    
    async def delete(self, installed_app_id: str) -> None:
        async with self._lock:
            if self._records.pop(installed_app_id, None) is not None:
                logger.debug(f"Deleted context for installed app {installed_app_id}")
    
    def __len__(self) -> int:
        return len(self._records)
    
    def __contains__(self, installed_app_id: object) -> bool:
        return installed_app_id in self._records
