"""Durable outbox for outbound webhook notifications."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from panel_api.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class WebhookEventType(StrEnum):
    """Kinds of events forwarded to the workflow-automation endpoint."""

    DONATION_CREATED = "donation_created"
    ERROR_LOGGED = "error_logged"
    TELEGRAM_NOTIFY = "telegram_notify"


class OutboxStatus(StrEnum):
    """Delivery state of an outbox event."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class WebhookOutboxEvent(Base, UUIDMixin, TimestampMixin):
    """An event waiting to be (or already) delivered to its webhook."""

    __tablename__ = "webhook_outbox"

    event_type: Mapped[str] = mapped_column(
        SAEnum(
            WebhookEventType,
            name="webhook_event_type",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    payload: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    status: Mapped[str] = mapped_column(
        SAEnum(
            OutboxStatus,
            name="outbox_status",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        default=OutboxStatus.PENDING,
        nullable=False,
    )
    attempts: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    max_attempts: Mapped[int] = mapped_column(Integer, default=5, nullable=False)
    next_attempt_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    last_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    delivered_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    __table_args__ = (Index("ix_webhook_outbox_status_next_attempt", "status", "next_attempt_at"),)

    def __repr__(self) -> str:
        return f"<WebhookOutboxEvent {self.id}: {self.event_type} ({self.status})>"
