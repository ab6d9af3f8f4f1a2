"""Theme preset API endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Path, status

from panel_api.auth.dependencies import ADMIN_ROLES, require_role
from panel_api.constants import RESERVED_THEME_NAMES, THEME_NAME_PATTERN
from panel_api.providers import ThemeSvc
from panel_api.repositories.theme_repository import ThemeConflictError
from panel_api.schemas.theme import ThemePresetResponse, ThemePresetSave
from panel_api.utils.audit import audit_logged

router = APIRouter()

_NAME = Path(pattern=THEME_NAME_PATTERN, description="Preset name (e.g. dark)")


def _not_found(name: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Theme preset '{name}' not found",
    )


def _conflict(exc: ThemeConflictError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get(
    "",
    response_model=list[ThemePresetResponse],
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def list_presets(service: ThemeSvc) -> list[ThemePresetResponse]:
    return await service.list_presets()


# Declared before "/{name}" so "default" is not taken for a preset name.
@router.get(
    "/default",
    response_model=ThemePresetResponse,
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def get_default_preset(service: ThemeSvc) -> ThemePresetResponse:
    """The active default preset."""
    preset = await service.get_default()
    if preset is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No default theme preset",
        )
    return preset


@router.get(
    "/{name}",
    response_model=ThemePresetResponse,
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def get_preset(service: ThemeSvc, name: str = _NAME) -> ThemePresetResponse:
    preset = await service.get_by_name(name)
    if preset is None:
        raise _not_found(name)
    return preset


@router.put(
    "/{name}",
    response_model=ThemePresetResponse,
    dependencies=[
        Depends(require_role(*ADMIN_ROLES)),
        Depends(audit_logged("save_theme")),
    ],
)
async def save_preset(
    body: ThemePresetSave,
    service: ThemeSvc,
    name: str = _NAME,
) -> ThemePresetResponse:
    """Create or update a preset. ``is_default: true`` makes it the only default."""
    if name in RESERVED_THEME_NAMES:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"'{name}' is reserved and cannot be used as a preset name",
        )
    try:
        return await service.save(name, body)
    except ThemeConflictError as exc:
        raise _conflict(exc)


@router.post(
    "/{name}/default",
    response_model=ThemePresetResponse,
    dependencies=[
        Depends(require_role(*ADMIN_ROLES)),
        Depends(audit_logged("set_default_theme")),
    ],
)
async def set_default_preset(service: ThemeSvc, name: str = _NAME) -> ThemePresetResponse:
    try:
        found = await service.set_default(name)
    except ThemeConflictError as exc:
        raise _conflict(exc)
    if not found:
        raise _not_found(name)
    return await get_preset(service, name)


@router.delete(
    "/{name}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[
        Depends(require_role("super_admin")),
        Depends(audit_logged("delete_theme")),
    ],
)
async def delete_preset(service: ThemeSvc, name: str = _NAME) -> None:
    """Delete a preset. The current default cannot be deleted."""
    preset = await service.get_by_name(name)
    if preset is None:
        raise _not_found(name)
    if preset.is_default:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Theme preset '{name}' is the default and cannot be deleted",
        )
    await service.delete(name)
