"""Service layer for the category-keyed settings store."""

import logging
from collections.abc import Iterable
from typing import Any

from panel_api.core.secrets import SECRET_MASK, SettingsCipher, mask_secret
from panel_api.core.setting_definitions import is_sensitive
from panel_api.models.setting import DataType, SystemSetting
from panel_api.repositories.settings_repository import SettingsRepository
from panel_api.schemas.settings import SettingResponse, SettingSummary

logger = logging.getLogger(__name__)


class SettingsService:
    """Business logic for system settings.

    Values of sensitive settings are sealed with :class:`SettingsCipher`
    before they are written and unsealed on read, so the repository only
    ever sees ciphertext for them. Read surfaces meant for the admin UI
    mask secrets instead of revealing them.
    """

    def __init__(self, repo: SettingsRepository, cipher: SettingsCipher):
        self._repo = repo
        self._cipher = cipher

    # ------------------------------------------------------------------
    # Sealing helpers
    # ------------------------------------------------------------------

    def _seal(self, value: Any) -> Any:
        if value is None:
            return None
        return self._cipher.seal(value)

    def _reveal(self, value: Any, encrypted: bool) -> Any:
        if not encrypted or value is None:
            return value
        return self._cipher.unseal(value)

    def _display(self, record: SystemSetting, mask: bool) -> tuple[Any, Any]:
        value = self._reveal(record.value, record.is_encrypted)
        default = self._reveal(record.default_value, record.is_encrypted)
        if mask and record.is_encrypted:
            return mask_secret(value), mask_secret(default)
        return value, default

    def to_response(self, record: SystemSetting, *, mask: bool = True) -> SettingResponse:
        value, default = self._display(record, mask)
        return SettingResponse(
            id=record.id,
            category=record.category,
            key=record.key,
            value=value,
            label=record.label,
            description=record.description,
            is_public=record.is_public,
            is_encrypted=record.is_encrypted,
            data_type=record.data_type,
            default_value=default,
            version=record.version,
            updated_at=record.updated_at,
        )

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get(self, category: str, key: str) -> Any:
        """Return the plaintext value of a setting, or None if it is absent."""
        record = await self._repo.get(category, key)
        if record is None:
            return None
        return self._reveal(record.value, record.is_encrypted)

    async def get_record(
        self, category: str, key: str, *, mask: bool = True
    ) -> SettingResponse | None:
        record = await self._repo.get(category, key)
        if record is None:
            return None
        return self.to_response(record, mask=mask)

    async def get_by_category(self, category: str, *, mask: bool = False) -> dict[str, Any]:
        """Flat ``{key: value}`` mapping for one category."""
        records = await self._repo.get_by_category(category)
        return {r.key: self._display(r, mask)[0] for r in records}

    async def get_all_grouped(self, *, mask: bool = True) -> dict[str, dict[str, SettingSummary]]:
        """Every setting, grouped by category and then by key."""
        grouped: dict[str, dict[str, SettingSummary]] = {}
        for record in await self._repo.get_all():
            value, default = self._display(record, mask)
            grouped.setdefault(record.category, {})[record.key] = SettingSummary(
                value=value,
                label=record.label,
                description=record.description,
                data_type=record.data_type,
                default_value=default,
                version=record.version,
            )
        return grouped

    async def get_public(self, category: str) -> dict[str, Any]:
        """Public settings of a category. Secrets are never revealed here."""
        records = await self._repo.get_by_category(category)
        return {r.key: self._display(r, mask=True)[0] for r in records if r.is_public}

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    async def set(
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
        """Create or update a setting.

        Sensitivity is the explicit *is_encrypted* flag, else the flag of
        the stored record, else the declared schema or key-name heuristic.
        When the sensitivity of a stored record changes and no new default
        is given, the stored default is carried over in the new form so
        that a later reset yields the same plaintext.

        Every write bumps the version by one, with one exception: writing
        the display mask back to a sensitive setting is not a write. The
        record is returned untouched and its version stays the same.

        Raises:
            VersionConflictError: If *expected_version* is stale or another
                writer won the race.
        """
        existing = await self._repo.get(category, key)

        if is_encrypted is not None:
            sensitive = is_encrypted
        elif existing is not None:
            sensitive = existing.is_encrypted
        else:
            sensitive = is_sensitive(category, key)

        if existing is not None and sensitive and existing.is_encrypted and value == SECRET_MASK:
            logger.debug("Ignoring masked write to %s.%s", category, key)
            return existing

        if (
            default_value is None
            and existing is not None
            and existing.default_value is not None
            and sensitive != existing.is_encrypted
        ):
            default_value = self._reveal(existing.default_value, existing.is_encrypted)

        if data_type is None and existing is None:
            data_type = DataType.infer(value)

        return await self._repo.upsert(
            category,
            key,
            self._seal(value) if sensitive else value,
            label=label,
            description=description,
            is_public=is_public,
            is_encrypted=sensitive,
            data_type=data_type,
            default_value=self._seal(default_value) if sensitive else default_value,
            expected_version=expected_version,
        )

    async def set_bulk(self, category: str, values: dict[str, Any]) -> list[SystemSetting]:
        """Set several keys of one category in the caller's transaction."""
        return [await self.set(category, key, value) for key, value in values.items()]

    async def delete(self, category: str, key: str) -> bool:
        return await self._repo.delete(category, key)

    async def reset_to_default(self, category: str, key: str) -> bool:
        """Copy the stored default into the value. False if there is none."""
        record = await self._repo.reset_to_default(category, key)
        return record is not None

    async def seed_defaults(self, category: str, defaults: Iterable[dict[str, Any]]) -> bool:
        """Insert *defaults* unless the category already holds any setting.

        Each row needs ``key`` and ``value``; ``label``, ``description``,
        ``is_public``, ``is_encrypted``, ``data_type`` and ``default_value``
        are optional.
        """
        if await self._repo.category_exists(category):
            logger.info("Category %s already seeded, skipping", category)
            return False

        rows = []
        for row in defaults:
            sensitive = is_sensitive(category, row["key"], row.get("is_encrypted"))
            value = row.get("value")
            default_value = row.get("default_value")
            rows.append(
                {
                    **row,
                    "value": self._seal(value) if sensitive else value,
                    "default_value": self._seal(default_value) if sensitive else default_value,
                    "is_encrypted": sensitive,
                    "data_type": row.get("data_type") or DataType.infer(value),
                }
            )

        await self._repo.insert_many(category, rows)
        logger.info("Seeded %d settings in category %s", len(rows), category)
        return True
