"""App settings blob (theme, notifications, workout preferences)."""

from typing import Any, Dict

from .base import BaseService
from ..models.library import AppSettings
from ..storage.base import StorageKeys


class AppSettingsService(BaseService):
    """Reads and writes the opaque ``appSettings`` blob."""

    async def get(self) -> AppSettings:
        return await self._read_or_default(
            StorageKeys.APP_SETTINGS, AppSettings.model_validate, AppSettings
        )

    async def update(self, changes: Dict[str, Any]) -> AppSettings:
        """Merge changes into the stored settings and save."""
        current = await self.get()
        merged = AppSettings.model_validate({**current.to_storage(), **changes})
        await self._write(StorageKeys.APP_SETTINGS, merged.to_storage())
        return merged
