"""Outbound webhook gateway to the workflow-automation endpoint.

``WebhookGateway.notify`` is best effort: it reports success as a bool and
never raises. Durable delivery (retries, backoff) is layered on top by the
outbox worker in ``panel_api.tasks.webhooks``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

import httpx

from panel_api.config import Settings
from panel_api.models.webhook_outbox import WebhookEventType

logger = logging.getLogger(__name__)

SECRET_HEADER = "X-Webhook-Secret"

# Error notifications below these severities are not forwarded.
FORWARDED_ERROR_SEVERITIES = frozenset({"critical", "high"})


class WebhookDeliveryError(Exception):
    """A webhook could not be delivered."""


def is_error_payload(event_type: WebhookEventType | str, payload: Mapping[str, Any]) -> bool:
    """Error events, and other notifications of type ``error`` that carry a severity.

    An ``error`` notification without a top-level severity was filtered
    by its sender and is forwarded as is.
    """
    if event_type == WebhookEventType.ERROR_LOGGED:
        return True
    return payload.get("type") == "error" and payload.get("severity") is not None


def should_forward(event_type: WebhookEventType | str, payload: Mapping[str, Any]) -> bool:
    """Return False for error notifications that are not critical or high."""
    if is_error_payload(event_type, payload):
        return payload.get("severity") in FORWARDED_ERROR_SEVERITIES
    return True


class WebhookGateway:
    """POSTs event payloads to the webhook configured for their type."""

    def __init__(
        self,
        endpoints: Mapping[WebhookEventType, str],
        secret: str,
        source: str,
        *,
        timeout: float = 10.0,
        client: httpx.Client | None = None,
    ):
        self._endpoints = dict(endpoints)
        self._secret = secret
        self._source = source
        self._client = client or httpx.Client(timeout=timeout)

    @classmethod
    def from_settings(
        cls, settings: Settings, client: httpx.Client | None = None
    ) -> WebhookGateway:
        return cls(
            endpoints={
                WebhookEventType.DONATION_CREATED: settings.webhook_donation_url,
                WebhookEventType.ERROR_LOGGED: settings.webhook_error_url,
                WebhookEventType.TELEGRAM_NOTIFY: settings.webhook_telegram_url,
            },
            secret=settings.webhook_secret,
            source=settings.webhook_source,
            timeout=settings.webhook_timeout_seconds,
            client=client,
        )

    def build_body(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        return {
            **payload,
            "triggered_at": datetime.now(UTC).isoformat(),
            "source": self._source,
        }

    def send(self, event_type: WebhookEventType, payload: Mapping[str, Any]) -> None:
        """POST *payload* to the webhook for *event_type*.

        Raises:
            WebhookDeliveryError: No endpoint is configured, the request
                failed in transport, or the endpoint answered non-2xx.
        """
        url = self._endpoints.get(event_type)
        if not url:
            raise WebhookDeliveryError(f"No webhook endpoint configured for {event_type}")

        try:
            response = self._client.post(
                url,
                json=self.build_body(payload),
                headers={SECRET_HEADER: self._secret},
            )
        except (httpx.HTTPError, TypeError, ValueError) as exc:
            raise WebhookDeliveryError(f"Error sending {event_type} webhook: {exc}") from exc

        if not response.is_success:
            raise WebhookDeliveryError(f"HTTP {response.status_code}: {response.text[:500]}")

    def notify(self, event_type: WebhookEventType, payload: Mapping[str, Any]) -> bool:
        """Best-effort variant of :meth:`send`.

        Returns True on a 2xx response. Suppressed events, non-2xx responses
        and transport errors are logged and return False.
        """
        if not should_forward(event_type, payload):
            logger.info(
                "Skipping webhook for non-critical error (severity=%s)", payload.get("severity")
            )
            return False

        try:
            self.send(event_type, payload)
        except WebhookDeliveryError as exc:
            logger.error("%s webhook failed: %s", event_type, exc)
            return False

        logger.info("%s webhook sent successfully", event_type)
        return True

    def close(self) -> None:
        self._client.close()
