"""Service layer for organization branding."""

from typing import Any

from panel_api.core.setting_definitions import (
    BRANDING_CATEGORY,
    BRANDING_DEFINITIONS,
    get_definition,
    logo_label,
)
from panel_api.models.base import utc_now
from panel_api.models.setting import DataType
from panel_api.schemas.branding import (
    BrandingUpdateResponse,
    LogoResponse,
    LogoType,
    OrganizationInfoUpdate,
)
from panel_api.services.settings_service import SettingsService


class BrandingService:
    """Organization info and logos, stored as public settings."""

    def __init__(self, settings: SettingsService):
        self._settings = settings

    async def get_branding(self) -> dict[str, Any]:
        return await self._settings.get_by_category(BRANDING_CATEGORY, mask=True)

    async def update_organization_info(
        self, update: OrganizationInfoUpdate
    ) -> BrandingUpdateResponse:
        provided = update.provided_settings()
        for key, value in provided.items():
            definition = get_definition(BRANDING_CATEGORY, key)
            await self._settings.set(
                BRANDING_CATEGORY,
                key,
                value,
                label=definition.label if definition else key,
                is_public=True,
                data_type=DataType.STRING,
            )
        return BrandingUpdateResponse(
            success=True,
            message="Organization info updated",
            updated=list(provided),
        )

    async def update_logo(self, logo_type: LogoType, storage_id: str, url: str) -> LogoResponse:
        await self._settings.set(
            BRANDING_CATEGORY,
            logo_type,
            {"storageId": storage_id, "url": url, "uploadedAt": utc_now().isoformat()},
            label=logo_label(logo_type),
            is_public=True,
            data_type=DataType.JSON,
        )
        return LogoResponse(success=True, message="Logo updated", logo_type=logo_type, url=url)

    async def remove_logo(self, logo_type: LogoType) -> bool:
        return await self._settings.delete(BRANDING_CATEGORY, logo_type)

    async def seed_defaults(self) -> bool:
        return await self._settings.seed_defaults(
            BRANDING_CATEGORY, [d.as_seed() for d in BRANDING_DEFINITIONS]
        )
