"""Settings store API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Path, status

from panel_api.auth.dependencies import ADMIN_ROLES, require_role
from panel_api.constants import CATEGORY_PATTERN, SETTING_KEY_PATTERN
from panel_api.providers import SettingsSvc
from panel_api.repositories.settings_repository import VersionConflictError
from panel_api.schemas.settings import (
    BulkSettingsRequest,
    BulkSettingsResponse,
    SeedDefaultsRequest,
    SeedResponse,
    SettingResponse,
    SettingSummary,
    SettingWrite,
)
from panel_api.utils.audit import audit_logged

router = APIRouter()

_CATEGORY = Path(pattern=CATEGORY_PATTERN, description="Setting category (e.g. branding)")
_KEY = Path(pattern=SETTING_KEY_PATTERN, description="Setting key (e.g. smtpHost)")


def _conflict(exc: VersionConflictError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get(
    "",
    response_model=dict[str, dict[str, SettingSummary]],
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def get_all_settings(service: SettingsSvc) -> dict[str, dict[str, SettingSummary]]:
    """All settings grouped by category. Secrets are masked."""
    return await service.get_all_grouped()


@router.get(
    "/{category}",
    response_model=dict[str, Any],
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def get_category(service: SettingsSvc, category: str = _CATEGORY) -> dict[str, Any]:
    """Flat ``{key: value}`` mapping of one category. Secrets are masked."""
    return await service.get_by_category(category, mask=True)


@router.put(
    "/{category}",
    response_model=BulkSettingsResponse,
    dependencies=[
        Depends(require_role(*ADMIN_ROLES)),
        Depends(audit_logged("update_settings")),
    ],
)
async def set_bulk(
    body: BulkSettingsRequest,
    service: SettingsSvc,
    category: str = _CATEGORY,
) -> BulkSettingsResponse:
    """Set several keys at once. Either every key is written or none is."""
    try:
        records = await service.set_bulk(category, body.settings)
    except VersionConflictError as exc:
        raise _conflict(exc)
    return BulkSettingsResponse(ids=[r.id for r in records], updated=[r.key for r in records])


@router.post(
    "/{category}/seed",
    response_model=SeedResponse,
    dependencies=[
        Depends(require_role("super_admin")),
        Depends(audit_logged("seed_settings")),
    ],
)
async def seed_category(
    body: SeedDefaultsRequest,
    service: SettingsSvc,
    category: str = _CATEGORY,
) -> SeedResponse:
    """Insert defaults into an empty category."""
    seeded = await service.seed_defaults(
        category, [d.model_dump(exclude_none=True) for d in body.defaults]
    )
    if not seeded:
        return SeedResponse(success=False, message=f"Category '{category}' is already seeded")
    return SeedResponse(
        success=True,
        message=f"Seeded {len(body.defaults)} settings",
        count=len(body.defaults),
    )


@router.get(
    "/{category}/{key}",
    response_model=SettingResponse,
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def get_setting(
    service: SettingsSvc,
    category: str = _CATEGORY,
    key: str = _KEY,
) -> SettingResponse:
    """Get one setting record with its metadata."""
    record = await service.get_record(category, key)
    if record is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Setting '{category}.{key}' not found",
        )
    return record


@router.put(
    "/{category}/{key}",
    response_model=SettingResponse,
    dependencies=[
        Depends(require_role(*ADMIN_ROLES)),
        Depends(audit_logged("update_setting")),
    ],
)
async def set_setting(
    body: SettingWrite,
    service: SettingsSvc,
    category: str = _CATEGORY,
    key: str = _KEY,
) -> SettingResponse:
    """
    Create or update a setting.

    Send ``expected_version`` to have the write rejected with 409 if the
    setting changed since it was read.
    """
    try:
        record = await service.set(
            category,
            key,
            body.value,
            label=body.label,
            description=body.description,
            is_public=body.is_public,
            is_encrypted=body.is_encrypted,
            data_type=body.data_type,
            default_value=body.default_value,
            expected_version=body.expected_version,
        )
    except VersionConflictError as exc:
        raise _conflict(exc)
    return service.to_response(record)


@router.delete(
    "/{category}/{key}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[
        Depends(require_role("super_admin")),
        Depends(audit_logged("delete_setting")),
    ],
)
async def delete_setting(
    service: SettingsSvc,
    category: str = _CATEGORY,
    key: str = _KEY,
) -> None:
    if not await service.delete(category, key):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Setting '{category}.{key}' not found",
        )


@router.post(
    "/{category}/{key}/reset",
    response_model=SettingResponse,
    dependencies=[
        Depends(require_role(*ADMIN_ROLES)),
        Depends(audit_logged("reset_setting")),
    ],
)
async def reset_setting(
    service: SettingsSvc,
    category: str = _CATEGORY,
    key: str = _KEY,
) -> SettingResponse:
    """Restore a setting's default value."""
    try:
        reset = await service.reset_to_default(category, key)
    except VersionConflictError as exc:
        raise _conflict(exc)
    if not reset:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Setting '{category}.{key}' not found or has no default value",
        )
    return await get_setting(service, category, key)
