"""Webhook-triggering endpoints.

Each endpoint queues an outbox event in the request transaction and hands
it to a Celery worker once the response is on its way. Error events, and
Telegram ``error`` notifications that carry a severity, are acknowledged
but not queued below ``high`` severity.
"""

from typing import Any

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request, status

from panel_api.auth.dependencies import ADMIN_ROLES, STAFF_ROLES, require_role
from panel_api.models.webhook_outbox import OutboxStatus, WebhookEventType
from panel_api.providers import DispatchSvc
from panel_api.rate_limit import limiter
from panel_api.schemas.webhook import (
    DonationCreatedEvent,
    ErrorLoggedEvent,
    OutboxEventResponse,
    TelegramNotification,
    WebhookAccepted,
)
from panel_api.services.dispatch_service import DispatchService
from panel_api.tasks.webhooks import enqueue_delivery

router = APIRouter()


async def _queue(
    service: DispatchService,
    background_tasks: BackgroundTasks,
    event_type: WebhookEventType,
    payload: dict[str, Any],
) -> WebhookAccepted:
    event = await service.dispatch(event_type, payload)
    if event is None:
        return WebhookAccepted(message="Event does not require a notification", queued=False)

    background_tasks.add_task(enqueue_delivery, event.id)
    return WebhookAccepted(message="Notification queued", queued=True, event_id=event.id)


@router.post(
    "/donation-created",
    response_model=WebhookAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(require_role(*STAFF_ROLES))],
)
@limiter.limit("30/minute")
async def donation_created(
    request: Request,
    body: DonationCreatedEvent,
    service: DispatchSvc,
    background_tasks: BackgroundTasks,
) -> WebhookAccepted:
    return await _queue(
        service,
        background_tasks,
        WebhookEventType.DONATION_CREATED,
        body.model_dump(mode="json", exclude_none=True),
    )


@router.post(
    "/error-logged",
    response_model=WebhookAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(require_role(*STAFF_ROLES))],
)
@limiter.limit("30/minute")
async def error_logged(
    request: Request,
    body: ErrorLoggedEvent,
    service: DispatchSvc,
    background_tasks: BackgroundTasks,
) -> WebhookAccepted:
    """Only ``critical`` and ``high`` errors are forwarded."""
    return await _queue(
        service,
        background_tasks,
        WebhookEventType.ERROR_LOGGED,
        body.model_dump(mode="json", exclude_none=True),
    )


@router.post(
    "/telegram-notify",
    response_model=WebhookAccepted,
    status_code=status.HTTP_202_ACCEPTED,
    dependencies=[Depends(require_role(*STAFF_ROLES))],
)
@limiter.limit("30/minute")
async def telegram_notify(
    request: Request,
    body: TelegramNotification,
    service: DispatchSvc,
    background_tasks: BackgroundTasks,
) -> WebhookAccepted:
    return await _queue(
        service,
        background_tasks,
        WebhookEventType.TELEGRAM_NOTIFY,
        body.model_dump(mode="json", exclude_none=True),
    )


@router.get(
    "/outbox",
    response_model=list[OutboxEventResponse],
    dependencies=[Depends(require_role(*ADMIN_ROLES))],
)
async def list_outbox(
    service: DispatchSvc,
    status_filter: OutboxStatus | None = Query(None, alias="status"),
    limit: int = Query(50, ge=1, le=200),
) -> list[OutboxEventResponse]:
    """Recent outbox events, newest first."""
    return await service.list_events(status=status_filter, limit=limit)
