"""Celery application configuration."""
from celery import Celery
from celery.schedules import crontab

from panel_api.config import get_settings

settings = get_settings()

celery_app = Celery(
    "kafkasder_panel",
    broker=settings.celery_broker_url,
    backend=settings.celery_result_backend,
)

celery_app.conf.update(
    # Task settings
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    # Task execution settings
    task_acks_late=True,  # Ack after task completes
    task_reject_on_worker_lost=True,
    task_track_started=True,
    # Result backend settings
    result_expires=3600,
    # Worker settings
    worker_prefetch_multiplier=1,
    worker_concurrency=4,
    # Task routes
    task_routes={
        "panel_api.tasks.webhooks.*": {"queue": "webhooks"},
        "panel_api.tasks.maintenance.*": {"queue": "maintenance"},
    },
    # Beat schedule (for periodic tasks)
    beat_schedule={
        "drain-webhook-outbox": {
            "task": "panel_api.tasks.webhooks.drain_webhook_outbox",
            "schedule": 30.0,  # Every 30 seconds
        },
        "purge-delivered-webhooks": {
            "task": "panel_api.tasks.maintenance.purge_delivered_webhooks",
            "schedule": 3600.0,  # Every hour
        },
        "purge-old-communication-logs": {
            "task": "panel_api.tasks.maintenance.purge_old_communication_logs",
            "schedule": crontab(hour=3, minute=0),  # Daily at 3am UTC
        },
    },
)

celery_app.autodiscover_tasks(
    [
        "panel_api.tasks.webhooks",
        "panel_api.tasks.maintenance",
    ]
)
