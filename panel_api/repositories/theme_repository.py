"""Repository for theme presets."""

from typing import Any

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from panel_api.models.theme import ThemePreset


class ThemeConflictError(Exception):
    """Raised when a concurrent writer created the same preset or switched the default."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Theme preset '{name}' was modified concurrently")


class ThemeRepository:
    """Data access layer for theme presets.

    Default switching clears the previous default and flushes before the
    new default is written, all inside the caller's transaction; the
    partial unique index on ``is_default`` rejects anything else, which
    surfaces as :class:`ThemeConflictError`.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> list[ThemePreset]:
        result = await self.session.execute(select(ThemePreset).order_by(ThemePreset.name))
        return list(result.scalars().all())

    async def get_by_name(self, name: str) -> ThemePreset | None:
        result = await self.session.execute(select(ThemePreset).where(ThemePreset.name == name))
        return result.scalar_one_or_none()

    async def get_default(self) -> ThemePreset | None:
        result = await self.session.execute(
            select(ThemePreset).where(ThemePreset.is_default == True)  # noqa: E712
        )
        return result.scalars().first()

    async def clear_defaults(self, exclude_id: str | None = None) -> None:
        """Unset ``is_default`` on every preset except *exclude_id*."""
        stmt = (
            update(ThemePreset)
            .where(ThemePreset.is_default == True)  # noqa: E712
            .values(is_default=False)
        )
        if exclude_id is not None:
            stmt = stmt.where(ThemePreset.id != exclude_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def save(
        self,
        name: str,
        *,
        colors: dict[str, Any],
        description: str | None = None,
        typography: dict[str, Any] | None = None,
        layout: dict[str, Any] | None = None,
        is_default: bool | None = None,
        is_custom: bool | None = None,
    ) -> ThemePreset:
        """Create or update the preset called *name*."""
        preset = await self.get_by_name(name)

        if is_default:
            await self.clear_defaults(exclude_id=preset.id if preset else None)

        if preset is None:
            preset = ThemePreset(
                name=name,
                description=description,
                colors=colors,
                typography=typography,
                layout=layout,
                is_default=bool(is_default),
                is_custom=True if is_custom is None else is_custom,
            )
            self.session.add(preset)
        else:
            preset.description = description
            preset.colors = colors
            preset.typography = typography
            preset.layout = layout
            if is_default is not None:
                preset.is_default = is_default
            if is_custom is not None:
                preset.is_custom = is_custom

        await self._flush(name)
        await self.session.refresh(preset)
        return preset

    async def set_default(self, name: str) -> ThemePreset | None:
        """Make *name* the only default. Returns None if it does not exist."""
        preset = await self.get_by_name(name)
        if preset is None:
            return None

        await self.clear_defaults(exclude_id=preset.id)
        preset.is_default = True
        await self._flush(name)
        await self.session.refresh(preset)
        return preset

    async def delete(self, name: str) -> bool:
        """Delete a preset unless it is missing or the current default."""
        preset = await self.get_by_name(name)
        if preset is None or preset.is_default:
            return False

        await self.session.delete(preset)
        await self.session.flush()
        return True

    async def _flush(self, name: str) -> None:
        try:
            await self.session.flush()
        except IntegrityError:
            await self.session.rollback()
            raise ThemeConflictError(name)
