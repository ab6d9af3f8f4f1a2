"""Branding API endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, status

from panel_api.auth.dependencies import ADMIN_ROLES, require_role
from panel_api.core.setting_definitions import BRANDING_DEFINITIONS
from panel_api.providers import BrandingSvc
from panel_api.repositories.settings_repository import VersionConflictError
from panel_api.schemas.branding import (
    BrandingUpdateResponse,
    LogoResponse,
    LogoType,
    LogoUpdate,
    OrganizationInfoUpdate,
)
from panel_api.schemas.settings import SeedResponse
from panel_api.utils.audit import audit_logged

router = APIRouter(dependencies=[Depends(require_role(*ADMIN_ROLES))])


@router.get("", response_model=dict[str, Any])
async def get_branding(service: BrandingSvc) -> dict[str, Any]:
    return await service.get_branding()


@router.put(
    "/organization",
    response_model=BrandingUpdateResponse,
    dependencies=[Depends(audit_logged("update_organization_info"))],
)
async def update_organization_info(
    body: OrganizationInfoUpdate,
    service: BrandingSvc,
) -> BrandingUpdateResponse:
    """Partial update; only the fields sent are written."""
    try:
        return await service.update_organization_info(body)
    except VersionConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.put(
    "/logos/{logo_type}",
    response_model=LogoResponse,
    dependencies=[Depends(audit_logged("update_logo"))],
)
async def update_logo(
    logo_type: LogoType,
    body: LogoUpdate,
    service: BrandingSvc,
) -> LogoResponse:
    try:
        return await service.update_logo(logo_type, body.storage_id, body.url)
    except VersionConflictError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.delete(
    "/logos/{logo_type}",
    response_model=LogoResponse,
    dependencies=[Depends(audit_logged("remove_logo"))],
)
async def remove_logo(logo_type: LogoType, service: BrandingSvc) -> LogoResponse:
    if not await service.remove_logo(logo_type):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Logo '{logo_type}' is not set",
        )
    return LogoResponse(success=True, message="Logo removed", logo_type=logo_type)


@router.post(
    "/seed",
    response_model=SeedResponse,
    dependencies=[Depends(audit_logged("seed_branding"))],
)
async def seed_branding(service: BrandingSvc) -> SeedResponse:
    if not await service.seed_defaults():
        return SeedResponse(success=False, message="Branding settings already exist")
    return SeedResponse(
        success=True,
        message="Default branding settings created",
        count=len(BRANDING_DEFINITIONS),
    )
