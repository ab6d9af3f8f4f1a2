"""Pydantic schemas for webhook-triggering events."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Severity = Literal["critical", "high", "medium", "low"]


class DonationCreatedEvent(BaseModel):
    """Donation notification. Unknown fields are forwarded as-is."""

    model_config = ConfigDict(extra="allow")

    donor_name: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0)
    receipt_number: str = Field(..., min_length=1)
    currency: str = "TRY"


class ErrorLoggedEvent(BaseModel):
    """Application error notification. Unknown fields are forwarded as-is."""

    model_config = ConfigDict(extra="allow")

    error_code: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    severity: Severity
    description: str | None = None


class TelegramAttachment(BaseModel):
    data: str  # base64
    filename: str
    caption: str | None = None


class TelegramNotification(BaseModel):
    type: Literal["donation", "meeting", "error", "task", "beneficiary", "scholarship", "general"]
    title: str = Field(..., min_length=1)
    description: str | None = None
    details: dict[str, Any] | None = None
    url: str | None = None
    recipient_type: Literal["group", "personal"]
    recipient_id: str | None = None
    severity: Severity | None = None
    has_attachment: bool = False
    attachment: TelegramAttachment | None = None


class WebhookAccepted(BaseModel):
    success: bool = True
    message: str
    queued: bool
    event_id: str | None = None


class OutboxEventResponse(BaseModel):
    id: str
    event_type: str
    status: str
    attempts: int
    max_attempts: int
    next_attempt_at: datetime
    last_error: str | None
    delivered_at: datetime | None
    created_at: datetime

    model_config = {"from_attributes": True}
