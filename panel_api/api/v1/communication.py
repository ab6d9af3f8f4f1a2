"""Communication channel configuration endpoints (email, SMS, WhatsApp)."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from panel_api.auth.dependencies import ADMIN_ROLES, require_role
from panel_api.models.communication_log import CommunicationType
from panel_api.providers import CommunicationSvc
from panel_api.rate_limit import limiter
from panel_api.repositories.settings_repository import VersionConflictError
from panel_api.schemas.communication import (
    ChannelUpdateResponse,
    CommunicationSettingsResponse,
    ConnectionTestResult,
    EmailSettingsUpdate,
    EmailTestRequest,
    PhoneTestRequest,
    SeedCommunicationResponse,
    SmsSettingsUpdate,
    WhatsAppSettingsUpdate,
)
from panel_api.utils.audit import audit_logged

router = APIRouter(dependencies=[Depends(require_role(*ADMIN_ROLES))])


def _conflict(exc: VersionConflictError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@router.get("", response_model=CommunicationSettingsResponse)
async def get_all_channels(service: CommunicationSvc) -> CommunicationSettingsResponse:
    """Settings of every channel. Credentials are masked."""
    return await service.get_all_channels()


@router.post(
    "/seed",
    response_model=SeedCommunicationResponse,
    dependencies=[Depends(audit_logged("seed_communication_settings"))],
)
async def seed_channels(service: CommunicationSvc) -> SeedCommunicationResponse:
    """Create default settings for every channel that has none yet."""
    seeded = await service.seed_defaults()
    return SeedCommunicationResponse(
        success=True,
        message="Default communication settings created"
        if any(seeded.values())
        else "Communication settings already exist",
        seeded=seeded,
    )


@router.get("/{channel}", response_model=dict[str, Any])
async def get_channel(channel: CommunicationType, service: CommunicationSvc) -> dict[str, Any]:
    return await service.get_channel(channel)


@router.put(
    "/email",
    response_model=ChannelUpdateResponse,
    dependencies=[Depends(audit_logged("update_email_settings"))],
)
async def update_email_settings(
    body: EmailSettingsUpdate, service: CommunicationSvc
) -> ChannelUpdateResponse:
    try:
        return await service.update_email_settings(body)
    except VersionConflictError as exc:
        raise _conflict(exc)


@router.put(
    "/sms",
    response_model=ChannelUpdateResponse,
    dependencies=[Depends(audit_logged("update_sms_settings"))],
)
async def update_sms_settings(
    body: SmsSettingsUpdate, service: CommunicationSvc
) -> ChannelUpdateResponse:
    try:
        return await service.update_sms_settings(body)
    except VersionConflictError as exc:
        raise _conflict(exc)


@router.put(
    "/whatsapp",
    response_model=ChannelUpdateResponse,
    dependencies=[Depends(audit_logged("update_whatsapp_settings"))],
)
async def update_whatsapp_settings(
    body: WhatsAppSettingsUpdate, service: CommunicationSvc
) -> ChannelUpdateResponse:
    try:
        return await service.update_whatsapp_settings(body)
    except VersionConflictError as exc:
        raise _conflict(exc)


@router.post("/email/test", response_model=ConnectionTestResult)
@limiter.limit("10/minute")
async def test_email_connection(
    request: Request, body: EmailTestRequest, service: CommunicationSvc
) -> ConnectionTestResult:
    """Check that email is enabled and fully configured. Nothing is sent."""
    return await service.test_email_connection(body.test_email)


@router.post("/sms/test", response_model=ConnectionTestResult)
@limiter.limit("10/minute")
async def test_sms_connection(
    request: Request, body: PhoneTestRequest, service: CommunicationSvc
) -> ConnectionTestResult:
    return await service.test_sms_connection(body.test_phone_number)


@router.post("/whatsapp/test", response_model=ConnectionTestResult)
@limiter.limit("10/minute")
async def test_whatsapp_connection(
    request: Request, body: PhoneTestRequest, service: CommunicationSvc
) -> ConnectionTestResult:
    return await service.test_whatsapp_connection(body.test_phone_number)
