"""Pydantic schemas for branding settings."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

LogoType = Literal["main_logo", "logo_dark", "favicon", "email_logo"]


class OrganizationInfoUpdate(BaseModel):
    """Partial update of organization info. Aliases are the stored keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    organization_name: str | None = Field(None, min_length=1, max_length=255)
    slogan: str | None = Field(None, max_length=500)
    footer_text: str | None = Field(None, max_length=500)
    contact_email: EmailStr | None = None
    contact_phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    website: str | None = Field(None, max_length=255)

    def provided_settings(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class BrandingUpdateResponse(BaseModel):
    success: bool
    message: str
    updated: list[str]


class LogoUpdate(BaseModel):
    storage_id: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1, max_length=2048)


class LogoResponse(BaseModel):
    success: bool
    message: str
    logo_type: LogoType
    url: str | None = None
