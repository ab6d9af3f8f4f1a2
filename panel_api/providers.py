"""FastAPI dependency providers for repositories and services.

Kept apart from ``dependencies.py`` so route modules can import the type
aliases below without circular imports.
"""

from typing import Annotated

from fastapi import Depends

from panel_api.core.secrets import SettingsCipher
from panel_api.dependencies import AppSettings, DBSession
from panel_api.repositories.communication_log_repository import CommunicationLogRepository
from panel_api.repositories.outbox_repository import OutboxRepository
from panel_api.repositories.settings_repository import SettingsRepository
from panel_api.repositories.theme_repository import ThemeRepository
from panel_api.services.branding_service import BrandingService
from panel_api.services.communication_log_service import CommunicationLogService
from panel_api.services.communication_service import CommunicationService
from panel_api.services.dispatch_service import DispatchService
from panel_api.services.settings_service import SettingsService
from panel_api.services.theme_service import ThemeService

# ---------------------------------------------------------------------------
# Repository providers
# ---------------------------------------------------------------------------


def get_settings_repository(db: DBSession) -> SettingsRepository:
    return SettingsRepository(db)


def get_theme_repository(db: DBSession) -> ThemeRepository:
    return ThemeRepository(db)


def get_communication_log_repository(db: DBSession) -> CommunicationLogRepository:
    return CommunicationLogRepository(db)


def get_outbox_repository(db: DBSession) -> OutboxRepository:
    return OutboxRepository(db)


SettingsRepo = Annotated[SettingsRepository, Depends(get_settings_repository)]
ThemeRepo = Annotated[ThemeRepository, Depends(get_theme_repository)]
CommunicationLogRepo = Annotated[
    CommunicationLogRepository, Depends(get_communication_log_repository)
]
OutboxRepo = Annotated[OutboxRepository, Depends(get_outbox_repository)]

# ---------------------------------------------------------------------------
# Service providers
# ---------------------------------------------------------------------------


def get_settings_cipher(settings: AppSettings) -> SettingsCipher:
    return SettingsCipher(settings.settings_encryption_key)


Cipher = Annotated[SettingsCipher, Depends(get_settings_cipher)]


def get_settings_service(repo: SettingsRepo, cipher: Cipher) -> SettingsService:
    return SettingsService(repo, cipher)


SettingsSvc = Annotated[SettingsService, Depends(get_settings_service)]


def get_theme_service(repo: ThemeRepo) -> ThemeService:
    return ThemeService(repo)


def get_communication_service(settings: SettingsSvc) -> CommunicationService:
    return CommunicationService(settings)


def get_branding_service(settings: SettingsSvc) -> BrandingService:
    return BrandingService(settings)


def get_communication_log_service(repo: CommunicationLogRepo) -> CommunicationLogService:
    return CommunicationLogService(repo)


def get_dispatch_service(repo: OutboxRepo, settings: AppSettings) -> DispatchService:
    return DispatchService(repo, settings)


ThemeSvc = Annotated[ThemeService, Depends(get_theme_service)]
CommunicationSvc = Annotated[CommunicationService, Depends(get_communication_service)]
BrandingSvc = Annotated[BrandingService, Depends(get_branding_service)]
CommunicationLogSvc = Annotated[CommunicationLogService, Depends(get_communication_log_service)]
DispatchSvc = Annotated[DispatchService, Depends(get_dispatch_service)]
