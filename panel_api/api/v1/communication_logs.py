"""Communication log endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status
from fastapi_filter import FilterDepends

from panel_api.auth.dependencies import ADMIN_ROLES, STAFF_ROLES, require_role
from panel_api.filters.communication_log import CommunicationLogFilter
from panel_api.models.communication_log import CommunicationType
from panel_api.providers import CommunicationLogSvc
from panel_api.schemas.communication import (
    BulkCommunicationLogCreate,
    CommunicationLogCreate,
    CommunicationLogResponse,
    CommunicationStatsResponse,
)

router = APIRouter()


@router.post(
    "",
    response_model=CommunicationLogResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*STAFF_ROLES))],
)
async def create_log(
    body: CommunicationLogCreate, service: CommunicationLogSvc
) -> CommunicationLogResponse:
    return await service.create(body)


@router.post(
    "/bulk",
    response_model=CommunicationLogResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_role(*STAFF_ROLES))],
)
async def create_bulk_log(
    body: BulkCommunicationLogCreate, service: CommunicationLogSvc
) -> CommunicationLogResponse:
    """Record a bulk send as a single entry."""
    return await service.create_bulk(body)


@router.get(
    "",
    response_model=list[CommunicationLogResponse],
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def list_logs(
    service: CommunicationLogSvc,
    filters: CommunicationLogFilter = FilterDepends(CommunicationLogFilter),
    limit: int = Query(100, ge=1, le=500),
) -> list[CommunicationLogResponse]:
    """
    List log entries, newest first.

    - **type**: email, sms or whatsapp
    - **status**: sent, failed or pending
    - **user_id**: sender
    - **order_by**: Sort fields (e.g. ``-sent_at``)
    """
    return await service.list_logs(filters, limit=limit)


@router.get(
    "/stats",
    response_model=CommunicationStatsResponse,
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def get_stats(
    service: CommunicationLogSvc,
    type: CommunicationType | None = Query(None),
    start: datetime | None = Query(None),
    end: datetime | None = Query(None),
) -> CommunicationStatsResponse:
    """Count entries by status within an optional type and time range."""
    return await service.get_stats(type=type, start=start, end=end)
