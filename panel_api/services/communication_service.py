"""Service layer for communication channel configuration."""

import logging
from typing import Any

from panel_api.core.setting_definitions import CHANNEL_DEFINITIONS, get_definition
from panel_api.models.communication_log import CommunicationType
from panel_api.schemas.communication import (
    ChannelUpdateResponse,
    CommunicationSettingsResponse,
    ConnectionTestResult,
    EmailSettingsUpdate,
    SmsSettingsUpdate,
    WhatsAppSettingsUpdate,
    _ChannelUpdate,
)
from panel_api.services.settings_service import SettingsService

logger = logging.getLogger(__name__)

_CHANNEL_NAMES = {
    CommunicationType.EMAIL: "email",
    CommunicationType.SMS: "SMS",
    CommunicationType.WHATSAPP: "WhatsApp",
}


class CommunicationService:
    """Email, SMS and WhatsApp settings stored through the settings store."""

    def __init__(self, settings: SettingsService):
        self._settings = settings

    async def get_channel(self, channel: CommunicationType) -> dict[str, Any]:
        """Stored settings of one channel with secrets masked."""
        return await self._settings.get_by_category(channel, mask=True)

    async def get_all_channels(self) -> CommunicationSettingsResponse:
        return CommunicationSettingsResponse(
            email=await self.get_channel(CommunicationType.EMAIL),
            sms=await self.get_channel(CommunicationType.SMS),
            whatsapp=await self.get_channel(CommunicationType.WHATSAPP),
        )

    async def _update_channel(
        self, channel: CommunicationType, update: _ChannelUpdate
    ) -> ChannelUpdateResponse:
        provided = update.provided_settings()
        for key, value in provided.items():
            definition = get_definition(channel, key)
            await self._settings.set(
                channel,
                key,
                value,
                label=definition.label if definition else None,
                is_public=False,
                data_type=definition.data_type if definition else None,
            )
        logger.info("Updated %d %s settings", len(provided), channel)
        return ChannelUpdateResponse(
            success=True,
            message=f"Updated {len(provided)} {_CHANNEL_NAMES[channel]} settings",
            updated=list(provided),
        )

    async def update_email_settings(self, update: EmailSettingsUpdate) -> ChannelUpdateResponse:
        return await self._update_channel(CommunicationType.EMAIL, update)

    async def update_sms_settings(self, update: SmsSettingsUpdate) -> ChannelUpdateResponse:
        return await self._update_channel(CommunicationType.SMS, update)

    async def update_whatsapp_settings(
        self, update: WhatsAppSettingsUpdate
    ) -> ChannelUpdateResponse:
        return await self._update_channel(CommunicationType.WHATSAPP, update)

    async def seed_defaults(self) -> dict[str, bool]:
        """Seed every channel that has no settings yet."""
        return {
            str(channel): await self._settings.seed_defaults(
                channel, [d.as_seed() for d in definitions]
            )
            for channel, definitions in CHANNEL_DEFINITIONS.items()
        }

    # ------------------------------------------------------------------
    # Connection tests (configuration checks, nothing is sent)
    # ------------------------------------------------------------------

    async def _check_channel(self, channel: CommunicationType, target: str) -> ConnectionTestResult:
        values = await self._settings.get_by_category(channel)
        name = _CHANNEL_NAMES[channel]
        test_mode = bool(values.get("testMode", False))

        if not values.get("enabled"):
            return ConnectionTestResult(
                success=False, message=f"{name} channel is disabled", test_mode=test_mode
            )

        missing = [
            d.key
            for d in CHANNEL_DEFINITIONS[channel]
            if d.required and values.get(d.key) in (None, "")
        ]
        if missing:
            return ConnectionTestResult(
                success=False,
                message=f"{name} channel is missing required settings: {', '.join(missing)}",
                test_mode=test_mode,
            )

        logger.info("%s configuration check passed for %s", name, target)
        return ConnectionTestResult(
            success=True,
            message=f"{name} configuration is complete; test target {target}",
            test_mode=test_mode,
        )

    async def test_email_connection(self, test_email: str) -> ConnectionTestResult:
        return await self._check_channel(CommunicationType.EMAIL, test_email)

    async def test_sms_connection(self, test_phone_number: str) -> ConnectionTestResult:
        return await self._check_channel(CommunicationType.SMS, test_phone_number)

    async def test_whatsapp_connection(self, test_phone_number: str) -> ConnectionTestResult:
        return await self._check_channel(CommunicationType.WHATSAPP, test_phone_number)
