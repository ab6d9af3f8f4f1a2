"""Service layer that queues outbound webhook notifications."""

import logging
from datetime import timedelta
from typing import Any

from panel_api.config import Settings
from panel_api.core.webhook_gateway import should_forward
from panel_api.models.base import utc_now
from panel_api.models.webhook_outbox import OutboxStatus, WebhookEventType, WebhookOutboxEvent
from panel_api.repositories.outbox_repository import OutboxRepository
from panel_api.schemas.webhook import OutboxEventResponse

logger = logging.getLogger(__name__)


class DispatchService:
    """Writes webhook events to the outbox in the caller's transaction.

    Delivery happens later in a Celery worker; the event only becomes
    visible to it once the surrounding request commits.
    """

    def __init__(self, repo: OutboxRepository, settings: Settings):
        self._repo = repo
        self._settings = settings

    async def dispatch(
        self, event_type: WebhookEventType, payload: dict[str, Any]
    ) -> WebhookOutboxEvent | None:
        """Queue *payload* for delivery. Returns None if the event is filtered out."""
        if not should_forward(event_type, payload):
            logger.info(
                "Not queueing %s webhook (severity=%s)", event_type, payload.get("severity")
            )
            return None

        # The request hands the event straight to a worker; the periodic
        # drain only picks it up if that hand-off never ran.
        available_at = utc_now() + timedelta(seconds=self._settings.webhook_immediate_grace_seconds)
        event = await self._repo.enqueue(
            event_type,
            payload,
            max_attempts=self._settings.webhook_max_attempts,
            available_at=available_at,
        )
        logger.info("Queued %s webhook event %s", event_type, event.id)
        return event

    async def list_events(
        self, status: OutboxStatus | None = None, limit: int = 50
    ) -> list[OutboxEventResponse]:
        events = await self._repo.get_all(status=status, limit=limit)
        return [OutboxEventResponse.model_validate(e) for e in events]
