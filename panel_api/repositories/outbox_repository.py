"""Repositories for the webhook outbox.

The async repository is used inside API requests so that enqueueing shares
the triggering write's transaction. The sync repository is used by Celery
workers that claim and deliver events.
"""

from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from panel_api.models.base import utc_now
from panel_api.models.webhook_outbox import OutboxStatus, WebhookEventType, WebhookOutboxEvent


def compute_backoff_seconds(attempt: int, base: int = 30, cap: int = 3600) -> int:
    """Exponential backoff: base, 2*base, 4*base ... clamped to *cap*."""
    return min(cap, base * 2 ** max(0, attempt - 1))


class OutboxRepository:
    """Async data access layer for outbox events."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def enqueue(
        self,
        event_type: WebhookEventType,
        payload: dict[str, Any],
        *,
        max_attempts: int,
        available_at: datetime | None = None,
    ) -> WebhookOutboxEvent:
        event = WebhookOutboxEvent(
            event_type=event_type,
            payload=payload,
            status=OutboxStatus.PENDING,
            attempts=0,
            max_attempts=max(1, max_attempts),
            next_attempt_at=available_at or utc_now(),
        )
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def get_by_id(self, event_id: str) -> WebhookOutboxEvent | None:
        return await self.session.get(WebhookOutboxEvent, event_id)

    async def get_all(
        self, status: OutboxStatus | None = None, limit: int = 50
    ) -> list[WebhookOutboxEvent]:
        query = select(WebhookOutboxEvent)
        if status is not None:
            query = query.where(WebhookOutboxEvent.status == status.value)
        query = query.order_by(WebhookOutboxEvent.created_at.desc()).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())


class SyncOutboxRepository:
    """Synchronous outbox access for Celery workers.

    Callers own the transaction and must commit after each state change.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, event_id: str) -> WebhookOutboxEvent | None:
        return self.session.get(WebhookOutboxEvent, event_id)

    def claim(self, event_id: str, *, lease_seconds: int) -> WebhookOutboxEvent | None:
        """Lease one pending event by id, whether or not it is due yet.

        Returns None if the event is gone, already settled, or locked by
        another worker.
        """
        event = self.session.execute(
            select(WebhookOutboxEvent)
            .where(
                WebhookOutboxEvent.id == event_id,
                WebhookOutboxEvent.status == OutboxStatus.PENDING.value,
            )
            .with_for_update(skip_locked=True)
        ).scalar_one_or_none()
        if event is not None:
            event.next_attempt_at = utc_now() + timedelta(seconds=lease_seconds)
            self.session.flush()
        return event

    def claim_due(self, *, limit: int, lease_seconds: int) -> list[WebhookOutboxEvent]:
        """Lease up to *limit* pending events whose retry time has come.

        Leasing pushes ``next_attempt_at`` forward so other workers skip the
        event while it is in flight.
        """
        now = utc_now()
        events = list(
            self.session.execute(
                select(WebhookOutboxEvent)
                .where(
                    WebhookOutboxEvent.status == OutboxStatus.PENDING.value,
                    WebhookOutboxEvent.next_attempt_at <= now,
                )
                .order_by(WebhookOutboxEvent.next_attempt_at)
                .limit(limit)
                .with_for_update(skip_locked=True)
            )
            .scalars()
            .all()
        )
        for event in events:
            event.next_attempt_at = now + timedelta(seconds=lease_seconds)
        self.session.flush()
        return events

    def mark_succeeded(self, event: WebhookOutboxEvent) -> None:
        now = utc_now()
        event.attempts += 1
        event.status = OutboxStatus.SUCCEEDED
        event.delivered_at = now
        event.last_error = None
        self.session.flush()

    def mark_failed(
        self, event: WebhookOutboxEvent, error: str, *, backoff_base: int, backoff_cap: int
    ) -> None:
        """Record a failed attempt; give up once ``max_attempts`` is reached."""
        event.attempts += 1
        event.last_error = error[:2000]
        if event.attempts >= event.max_attempts:
            event.status = OutboxStatus.FAILED
        else:
            delay = compute_backoff_seconds(event.attempts, backoff_base, backoff_cap)
            event.next_attempt_at = utc_now() + timedelta(seconds=delay)
        self.session.flush()

    def purge_delivered(self, cutoff: datetime) -> int:
        result = self.session.execute(
            delete(WebhookOutboxEvent).where(
                WebhookOutboxEvent.status == OutboxStatus.SUCCEEDED.value,
                WebhookOutboxEvent.delivered_at < cutoff,
            )
        )
        return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]
