"""Pydantic schemas for communication channel settings and the message log."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from pydantic.alias_generators import to_camel

from panel_api.constants import PHONE_PATTERN
from panel_api.models.communication_log import (
    CommunicationLog,
    CommunicationStatus,
    CommunicationType,
)
from panel_api.models.base import utc_now


class _ChannelUpdate(BaseModel):
    """Partial channel update. Field aliases are the stored setting keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    enabled: bool | None = None

    def provided_settings(self) -> dict[str, Any]:
        """Only the fields the caller actually sent, keyed by setting key."""
        return self.model_dump(by_alias=True, exclude_unset=True, exclude_none=True)


class EmailSettingsUpdate(_ChannelUpdate):
    smtp_host: str | None = Field(None, max_length=255)
    smtp_port: int | None = Field(None, ge=1, le=65535)
    smtp_user: str | None = Field(None, max_length=255)
    smtp_password: str | None = None
    smtp_secure: bool | None = None
    from_email: EmailStr | None = None
    from_name: str | None = Field(None, max_length=255)
    reply_to_email: EmailStr | None = None


class SmsSettingsUpdate(_ChannelUpdate):
    twilio_account_sid: str | None = None
    twilio_auth_token: str | None = None
    twilio_phone_number: str | None = None
    twilio_messaging_service_sid: str | None = None
    test_mode: bool | None = None


class WhatsAppSettingsUpdate(_ChannelUpdate):
    phone_number_id: str | None = None
    access_token: str | None = None
    business_account_id: str | None = None
    webhook_verify_token: str | None = None
    test_mode: bool | None = None


class ChannelUpdateResponse(BaseModel):
    success: bool
    message: str
    updated: list[str]


class CommunicationSettingsResponse(BaseModel):
    email: dict[str, Any]
    sms: dict[str, Any]
    whatsapp: dict[str, Any]


class SeedCommunicationResponse(BaseModel):
    success: bool
    message: str
    seeded: dict[str, bool]


class EmailTestRequest(BaseModel):
    test_email: EmailStr


class PhoneTestRequest(BaseModel):
    test_phone_number: str = Field(..., pattern=PHONE_PATTERN)


class ConnectionTestResult(BaseModel):
    success: bool
    message: str
    test_mode: bool = False


# ---------------------------------------------------------------------------
# Communication log
# ---------------------------------------------------------------------------


class CommunicationLogCreate(BaseModel):
    type: CommunicationType
    to: str = Field(..., min_length=1, max_length=255)
    subject: str | None = Field(None, max_length=500)
    message: str = Field(..., min_length=1)
    status: CommunicationStatus
    message_id: str | None = None
    error: str | None = None
    sent_at: datetime = Field(default_factory=utc_now)
    user_id: str | None = None
    metadata: dict[str, Any] | None = None


class BulkCommunicationLogCreate(BaseModel):
    type: CommunicationType
    recipient_count: int = Field(..., ge=0)
    message: str = Field(..., min_length=1)
    successful: int = Field(..., ge=0)
    failed: int = Field(..., ge=0)
    sent_at: datetime = Field(default_factory=utc_now)
    user_id: str | None = None
    metadata: dict[str, Any] | None = None

    @model_validator(mode="after")
    def validate_tallies(self) -> "BulkCommunicationLogCreate":
        """successful + failed cannot exceed the number of recipients."""
        if self.successful + self.failed > self.recipient_count:
            raise ValueError("successful + failed must not exceed recipient_count")
        return self


class CommunicationLogResponse(BaseModel):
    id: str
    type: CommunicationType
    to: str
    subject: str | None
    message: str
    status: CommunicationStatus
    message_id: str | None
    error: str | None
    sent_at: datetime
    user_id: str | None
    metadata: dict[str, Any] | None

    @classmethod
    def from_model(cls, log: CommunicationLog) -> "CommunicationLogResponse":
        return cls(
            id=log.id,
            type=log.type,
            to=log.recipient,
            subject=log.subject,
            message=log.message,
            status=log.status,
            message_id=log.message_id,
            error=log.error,
            sent_at=log.sent_at,
            user_id=log.user_id,
            metadata=log.extra_metadata,
        )


class CommunicationStatsResponse(BaseModel):
    total: int
    sent: int
    failed: int
    pending: int
