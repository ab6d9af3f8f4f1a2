"""Pydantic schemas for theme presets."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class ThemePresetSave(BaseModel):
    """Request schema for creating or updating a preset (keyed by name)."""

    description: str | None = None
    colors: dict[str, Any] = Field(..., min_length=1)
    typography: dict[str, Any] | None = None
    layout: dict[str, Any] | None = None
    is_default: bool | None = None
    is_custom: bool | None = None


class ThemePresetResponse(BaseModel):
    id: str
    name: str
    description: str | None
    colors: dict[str, Any]
    typography: dict[str, Any] | None
    layout: dict[str, Any] | None
    is_default: bool
    is_custom: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
