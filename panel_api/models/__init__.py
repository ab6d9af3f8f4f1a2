"""Database models package."""

from panel_api.models.base import Base
from panel_api.models.communication_log import (
    CommunicationLog,
    CommunicationStatus,
    CommunicationType,
)
from panel_api.models.setting import DataType, SystemSetting
from panel_api.models.theme import ThemePreset
from panel_api.models.user import UserRole
from panel_api.models.webhook_outbox import OutboxStatus, WebhookEventType, WebhookOutboxEvent

__all__ = [
    # Base
    "Base",
    # Models
    "SystemSetting",
    "ThemePreset",
    "CommunicationLog",
    "WebhookOutboxEvent",
    # Enums
    "DataType",
    "CommunicationType",
    "CommunicationStatus",
    "WebhookEventType",
    "OutboxStatus",
    "UserRole",
]
