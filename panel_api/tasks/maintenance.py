"""Celery tasks for maintenance operations."""

import logging
from datetime import UTC, datetime, timedelta

from panel_api.config import get_settings
from panel_api.repositories.communication_log_repository import SyncCommunicationLogRepository
from panel_api.repositories.outbox_repository import SyncOutboxRepository
from panel_api.tasks.celery_app import celery_app
from panel_api.tasks.webhooks import get_sync_session

logger = logging.getLogger(__name__)


@celery_app.task
def purge_delivered_webhooks() -> dict[str, int]:
    """
    Remove delivered outbox events past the retention window.

    Failed events are kept so they can be inspected.
    """
    settings = get_settings()
    session = get_sync_session()

    try:
        cutoff = datetime.now(UTC) - timedelta(days=settings.webhook_retention_days)
        deleted = SyncOutboxRepository(session).purge_delivered(cutoff)
        session.commit()

        logger.info("Deleted %d delivered webhook events", deleted)
        return {"deleted": deleted}

    finally:
        session.close()


@celery_app.task
def purge_old_communication_logs() -> dict[str, int]:
    """Remove communication log entries older than the retention window."""
    settings = get_settings()
    session = get_sync_session()

    try:
        cutoff = datetime.now(UTC) - timedelta(days=settings.communication_log_retention_days)
        deleted = SyncCommunicationLogRepository(session).purge_older_than(cutoff)
        session.commit()

        logger.info("Deleted %d communication log entries", deleted)
        return {"deleted": deleted}

    finally:
        session.close()
