"""Unauthenticated read access to public settings (e.g. branding)."""

from typing import Any

from fastapi import APIRouter, Path, Request

from panel_api.constants import CATEGORY_PATTERN
from panel_api.providers import SettingsSvc
from panel_api.rate_limit import limiter

router = APIRouter()


@router.get("/settings/{category}", response_model=dict[str, Any])
@limiter.limit("60/minute")
async def get_public_settings(
    request: Request,
    service: SettingsSvc,
    category: str = Path(pattern=CATEGORY_PATTERN),
) -> dict[str, Any]:
    """Settings of *category* flagged ``is_public``."""
    return await service.get_public(category)
