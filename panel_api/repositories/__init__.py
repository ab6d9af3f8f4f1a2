"""Database repositories for data access."""
from panel_api.repositories.communication_log_repository import CommunicationLogRepository
from panel_api.repositories.outbox_repository import OutboxRepository, SyncOutboxRepository
from panel_api.repositories.settings_repository import SettingsRepository, VersionConflictError
from panel_api.repositories.theme_repository import ThemeRepository

__all__ = [
    "SettingsRepository",
    "ThemeRepository",
    "CommunicationLogRepository",
    "OutboxRepository",
    "SyncOutboxRepository",
    "VersionConflictError",
]
