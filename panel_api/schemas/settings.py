"""Pydantic schemas for the settings store."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from panel_api.constants import SETTING_KEY_PATTERN
from panel_api.models.setting import DataType


class SettingWrite(BaseModel):
    """Request schema for creating or updating a single setting."""

    value: Any
    label: str | None = Field(None, max_length=255)
    description: str | None = None
    is_public: bool | None = None
    is_encrypted: bool | None = None
    data_type: DataType | None = None
    default_value: Any = None
    expected_version: int | None = Field(
        None, ge=0, description="Reject the write unless the stored version matches."
    )


class SettingSeed(BaseModel):
    """One default inserted by a seeding call."""

    key: str = Field(..., pattern=SETTING_KEY_PATTERN)
    value: Any
    label: str | None = Field(None, max_length=255)
    description: str | None = None
    is_public: bool = False
    is_encrypted: bool | None = None
    data_type: DataType | None = None
    default_value: Any = None


class SeedDefaultsRequest(BaseModel):
    defaults: list[SettingSeed] = Field(..., min_length=1)


class SeedResponse(BaseModel):
    success: bool
    message: str
    count: int = 0


class BulkSettingsRequest(BaseModel):
    settings: dict[str, Any] = Field(..., min_length=1)


class BulkSettingsResponse(BaseModel):
    ids: list[str]
    updated: list[str]


class SettingResponse(BaseModel):
    """A setting record with its metadata."""

    id: str
    category: str
    key: str
    value: Any
    label: str | None
    description: str | None
    is_public: bool
    is_encrypted: bool
    data_type: DataType
    default_value: Any
    version: int
    updated_at: datetime


class SettingSummary(BaseModel):
    """Per-key entry of the grouped admin view."""

    value: Any
    label: str | None
    description: str | None
    data_type: DataType
    default_value: Any
    version: int
