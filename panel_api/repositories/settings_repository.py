"""Repository for category-keyed system settings."""

from collections.abc import Iterable
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from panel_api.models.base import utc_now
from panel_api.models.setting import DataType, SystemSetting


class VersionConflictError(Exception):
    """Raised when a setting changed since the writer last read it."""

    def __init__(self, category: str, key: str, expected: int | None, actual: int | None = None):
        self.category = category
        self.key = key
        self.expected = expected
        self.actual = actual
        detail = f"expected version {expected}" if expected is not None else "concurrent update"
        if actual is not None:
            detail += f", found {actual}"
        super().__init__(f"Setting '{category}.{key}' was modified ({detail})")


class SettingsRepository:
    """Async data access layer for system settings."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, category: str, key: str) -> SystemSetting | None:
        """Get a setting record by ``(category, key)``."""
        result = await self.session.execute(
            select(SystemSetting).where(
                SystemSetting.category == category, SystemSetting.key == key
            )
        )
        return result.scalar_one_or_none()

    async def get_by_category(self, category: str) -> list[SystemSetting]:
        result = await self.session.execute(
            select(SystemSetting)
            .where(SystemSetting.category == category)
            .order_by(SystemSetting.key)
        )
        return list(result.scalars().all())

    async def get_all(self) -> list[SystemSetting]:
        result = await self.session.execute(
            select(SystemSetting).order_by(SystemSetting.category, SystemSetting.key)
        )
        return list(result.scalars().all())

    async def category_exists(self, category: str) -> bool:
        result = await self.session.execute(
            select(SystemSetting.id).where(SystemSetting.category == category).limit(1)
        )
        return result.first() is not None

    async def upsert(
        self,
        category: str,
        key: str,
        value: Any,
        *,
        label: str | None = None,
        description: str | None = None,
        is_public: bool | None = None,
        is_encrypted: bool | None = None,
        data_type: DataType | None = None,
        default_value: Any = None,
        expected_version: int | None = None,
    ) -> SystemSetting:
        """Insert or update a setting.

        Metadata arguments left as None keep their stored value on update.
        The version starts at 1 and is incremented by every update.

        Raises:
            VersionConflictError: If *expected_version* does not match the
                stored version, or another writer updated the row between
                our read and our write.
        """
        setting = await self.get(category, key)

        if setting is None:
            if expected_version:
                raise VersionConflictError(category, key, expected_version)
            setting = SystemSetting(
                category=category,
                key=key,
                value=value,
                label=label,
                description=description,
                is_public=bool(is_public),
                is_encrypted=bool(is_encrypted),
                data_type=data_type or DataType.infer(value),
                default_value=default_value,
                updated_at=utc_now(),
            )
            self.session.add(setting)
            try:
                await self.session.flush()
            except IntegrityError:
                await self.session.rollback()
                raise VersionConflictError(category, key, expected_version)
            await self.session.refresh(setting)
            return setting

        if expected_version is not None and setting.version != expected_version:
            raise VersionConflictError(category, key, expected_version, setting.version)

        setting.value = value
        optional = {
            "label": label,
            "description": description,
            "is_public": is_public,
            "is_encrypted": is_encrypted,
            "data_type": data_type,
            "default_value": default_value,
        }
        for field, field_value in optional.items():
            if field_value is not None:
                setattr(setting, field, field_value)
        setting.updated_at = utc_now()

        await self._flush_versioned(setting)
        return setting

    async def delete(self, category: str, key: str) -> bool:
        """Hard delete a setting. Returns False if it did not exist."""
        setting = await self.get(category, key)
        if not setting:
            return False

        await self.session.delete(setting)
        await self.session.flush()
        return True

    async def reset_to_default(self, category: str, key: str) -> SystemSetting | None:
        """Copy ``default_value`` into ``value``.

        Returns None when the setting is missing or has no default.
        """
        setting = await self.get(category, key)
        if setting is None or setting.default_value is None:
            return None

        setting.value = setting.default_value
        setting.updated_at = utc_now()
        await self._flush_versioned(setting)
        return setting

    async def insert_many(self, category: str, rows: Iterable[dict[str, Any]]) -> list[SystemSetting]:
        """Insert new settings at version 1."""
        now = utc_now()
        settings = [
            SystemSetting(
                category=category,
                key=row["key"],
                value=row.get("value"),
                label=row.get("label"),
                description=row.get("description"),
                is_public=bool(row.get("is_public", False)),
                is_encrypted=bool(row.get("is_encrypted", False)),
                data_type=row.get("data_type") or DataType.infer(row.get("value")),
                default_value=row.get("default_value"),
                updated_at=now,
            )
            for row in rows
        ]
        self.session.add_all(settings)
        await self.session.flush()
        return settings

    async def _flush_versioned(self, setting: SystemSetting) -> None:
        category, key, read_version = setting.category, setting.key, setting.version
        try:
            await self.session.flush()
        except StaleDataError:
            await self.session.rollback()
            raise VersionConflictError(category, key, read_version)
        await self.session.refresh(setting)
