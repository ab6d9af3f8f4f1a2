"""Communication log model (append-only)."""

from datetime import datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from panel_api.models.base import Base, JSONType, TimestampMixin, UUIDMixin


class CommunicationType(StrEnum):
    """Outbound communication channels."""

    EMAIL = "email"
    SMS = "sms"
    WHATSAPP = "whatsapp"


class CommunicationStatus(StrEnum):
    """Delivery status of a logged communication."""

    SENT = "sent"
    FAILED = "failed"
    PENDING = "pending"


class CommunicationLog(Base, UUIDMixin, TimestampMixin):
    """One sent (or attempted) message, or a bulk send summary."""

    __tablename__ = "communication_logs"

    type: Mapped[str] = mapped_column(
        SAEnum(
            CommunicationType,
            name="communication_type",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    recipient: Mapped[str] = mapped_column(String(255), nullable=False)
    subject: Mapped[str | None] = mapped_column(String(500), nullable=True)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        SAEnum(
            CommunicationStatus,
            name="communication_status",
            create_constraint=True,
            native_enum=False,
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    message_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    error: Mapped[str | None] = mapped_column(Text, nullable=True)
    sent_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)

    # "metadata" is reserved on declarative classes
    extra_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSONType, nullable=True
    )

    __table_args__ = (Index("ix_communication_logs_type_sent_at", "type", "sent_at"),)

    def __repr__(self) -> str:
        return f"<CommunicationLog {self.type} -> {self.recipient} ({self.status})>"
