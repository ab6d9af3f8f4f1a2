"""Pydantic schemas package."""
from panel_api.schemas.settings import (
    BulkSettingsRequest,
    BulkSettingsResponse,
    SeedDefaultsRequest,
    SeedResponse,
    SettingResponse,
    SettingSeed,
    SettingSummary,
    SettingWrite,
)
from panel_api.schemas.theme import ThemePresetResponse, ThemePresetSave

__all__ = [
    # Settings schemas
    "SettingWrite",
    "SettingSeed",
    "SettingResponse",
    "SettingSummary",
    "SeedDefaultsRequest",
    "SeedResponse",
    "BulkSettingsRequest",
    "BulkSettingsResponse",
    # Theme schemas
    "ThemePresetSave",
    "ThemePresetResponse",
]
