"""Service layer for theme presets."""

import logging
from collections.abc import Iterable
from typing import Any

from panel_api.repositories.theme_repository import ThemeRepository
from panel_api.schemas.theme import ThemePresetResponse, ThemePresetSave

logger = logging.getLogger(__name__)


class ThemeService:
    """Business logic for the theme preset registry."""

    def __init__(self, repo: ThemeRepository):
        self._repo = repo

    async def list_presets(self) -> list[ThemePresetResponse]:
        presets = await self._repo.get_all()
        return [ThemePresetResponse.model_validate(p) for p in presets]

    async def get_default(self) -> ThemePresetResponse | None:
        preset = await self._repo.get_default()
        if preset is None:
            return None
        return ThemePresetResponse.model_validate(preset)

    async def get_by_name(self, name: str) -> ThemePresetResponse | None:
        preset = await self._repo.get_by_name(name)
        if preset is None:
            return None
        return ThemePresetResponse.model_validate(preset)

    async def save(self, name: str, data: ThemePresetSave) -> ThemePresetResponse:
        """Create or update a preset. ``is_default=True`` demotes every other preset."""
        preset = await self._repo.save(
            name,
            colors=data.colors,
            description=data.description,
            typography=data.typography,
            layout=data.layout,
            is_default=data.is_default,
            is_custom=data.is_custom,
        )
        return ThemePresetResponse.model_validate(preset)

    async def set_default(self, name: str) -> bool:
        preset = await self._repo.set_default(name)
        if preset is None:
            return False
        logger.info("Theme preset %s is now the default", name)
        return True

    async def delete(self, name: str) -> bool:
        return await self._repo.delete(name)

    async def seed(self, presets: Iterable[dict[str, Any]]) -> int:
        """Insert the given presets that do not exist yet. Returns how many were added."""
        added = 0
        for entry in presets:
            name = entry["name"]
            if await self._repo.get_by_name(name) is not None:
                continue
            await self.save(name, ThemePresetSave.model_validate(entry))
            added += 1
        return added
