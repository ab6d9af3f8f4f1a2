"""Celery tasks that deliver queued webhook events.

Events are written to ``webhook_outbox`` by the API in the same transaction
as the write that triggered them. Each event is handed to
``deliver_webhook_event`` right after the request, and ``drain_webhook_outbox``
(run by beat) picks up anything that is due: events whose hand-off never
ran and events waiting for a retry. Delivery is at-least-once.
"""

import logging
from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from panel_api.config import Settings, get_settings
from panel_api.core.webhook_gateway import WebhookDeliveryError, WebhookGateway
from panel_api.models.webhook_outbox import WebhookOutboxEvent
from panel_api.repositories.outbox_repository import SyncOutboxRepository
from panel_api.tasks.celery_app import celery_app

logger = logging.getLogger(__name__)


@lru_cache
def _session_factory(sync_url: str) -> sessionmaker[Session]:
    return sessionmaker(bind=create_engine(sync_url, pool_pre_ping=True))


def get_sync_session() -> Session:
    """Get synchronous database session for Celery tasks."""
    return _session_factory(get_settings().sync_database_url)()


@lru_cache
def get_gateway() -> WebhookGateway:
    """Process-wide gateway so the HTTP connection pool is reused."""
    return WebhookGateway.from_settings(get_settings())


def enqueue_delivery(event_id: str) -> None:
    """Hand an outbox event to a worker. Broker errors are logged, not raised."""
    try:
        deliver_webhook_event.delay(event_id)  # pyright: ignore[reportFunctionMemberAccess]
    except Exception:
        logger.exception("Could not enqueue delivery of %s; the outbox drain will retry", event_id)


def deliver_event(
    repo: SyncOutboxRepository,
    gateway: WebhookGateway,
    event: WebhookOutboxEvent,
    settings: Settings,
) -> bool:
    """Attempt one delivery and record the outcome on *event*."""
    try:
        gateway.send(event.event_type, event.payload)
    except WebhookDeliveryError as exc:
        repo.mark_failed(
            event,
            str(exc),
            backoff_base=settings.webhook_backoff_base_seconds,
            backoff_cap=settings.webhook_backoff_max_seconds,
        )
        logger.warning(
            "Delivery of %s (%s) failed on attempt %d/%d: %s",
            event.id,
            event.event_type,
            event.attempts,
            event.max_attempts,
            exc,
        )
        return False

    repo.mark_succeeded(event)
    logger.info("Delivered %s (%s) after %d attempt(s)", event.id, event.event_type, event.attempts)
    return True


def drain_outbox(session: Session, gateway: WebhookGateway, settings: Settings) -> dict[str, int]:
    """Claim due events, deliver them, and commit after each one."""
    repo = SyncOutboxRepository(session)
    events = repo.claim_due(
        limit=settings.webhook_drain_batch_size,
        lease_seconds=settings.webhook_lease_seconds,
    )
    # Persist the leases so concurrent drains skip these events
    session.commit()

    delivered = 0
    for event in events:
        if deliver_event(repo, gateway, event, settings):
            delivered += 1
        session.commit()

    return {"claimed": len(events), "delivered": delivered, "failed": len(events) - delivered}


@celery_app.task
def deliver_webhook_event(event_id: str) -> dict[str, object]:
    """Deliver a single event right after the request that queued it."""
    settings = get_settings()
    session = get_sync_session()

    try:
        repo = SyncOutboxRepository(session)
        event = repo.claim(event_id, lease_seconds=settings.webhook_lease_seconds)
        if event is None:
            # Not committed yet, already delivered, or held by a drain
            logger.info("Outbox event %s not claimable, leaving it to the drain", event_id)
            return {"status": "skipped", "event_id": event_id}
        session.commit()

        delivered = deliver_event(repo, get_gateway(), event, settings)
        session.commit()
        return {"status": str(event.status), "event_id": event_id, "delivered": delivered}

    finally:
        session.close()


@celery_app.task
def drain_webhook_outbox() -> dict[str, int]:
    """Deliver every due outbox event (periodic)."""
    session = get_sync_session()

    try:
        result = drain_outbox(session, get_gateway(), get_settings())
        if result["claimed"]:
            logger.info("Outbox drain: %s", result)
        return result

    finally:
        session.close()
