"""Service layer for the communication log."""

from datetime import datetime

from panel_api.filters.communication_log import CommunicationLogFilter
from panel_api.models.communication_log import CommunicationStatus, CommunicationType
from panel_api.repositories.communication_log_repository import CommunicationLogRepository
from panel_api.schemas.communication import (
    BulkCommunicationLogCreate,
    CommunicationLogCreate,
    CommunicationLogResponse,
    CommunicationStatsResponse,
)


class CommunicationLogService:
    """Append-only history of sent messages."""

    def __init__(self, repo: CommunicationLogRepository):
        self._repo = repo

    async def create(self, entry: CommunicationLogCreate) -> CommunicationLogResponse:
        log = await self._repo.create(
            type=entry.type,
            recipient=entry.to,
            subject=entry.subject,
            message=entry.message,
            status=entry.status,
            message_id=entry.message_id,
            error=entry.error,
            sent_at=entry.sent_at,
            user_id=entry.user_id,
            extra_metadata=entry.metadata,
        )
        return CommunicationLogResponse.from_model(log)

    async def create_bulk(self, entry: BulkCommunicationLogCreate) -> CommunicationLogResponse:
        """Record a bulk send as one synthetic entry.

        The send counts as ``sent`` if anything went out (or nothing failed).
        """
        status = (
            CommunicationStatus.SENT
            if entry.failed == 0 or entry.successful > 0
            else CommunicationStatus.FAILED
        )
        log = await self._repo.create(
            type=entry.type,
            recipient=f"Bulk: {entry.recipient_count} recipients",
            message=entry.message,
            status=status,
            sent_at=entry.sent_at,
            user_id=entry.user_id,
            extra_metadata={
                **(entry.metadata or {}),
                "bulkOperation": True,
                "recipientCount": entry.recipient_count,
                "successful": entry.successful,
                "failed": entry.failed,
            },
        )
        return CommunicationLogResponse.from_model(log)

    async def list_logs(
        self, filters: CommunicationLogFilter, limit: int = 100
    ) -> list[CommunicationLogResponse]:
        logs = await self._repo.get_all(filters, limit=limit)
        return [CommunicationLogResponse.from_model(log) for log in logs]

    async def get_stats(
        self,
        type: CommunicationType | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> CommunicationStatsResponse:
        stats = await self._repo.get_stats(type=type, start=start, end=end)
        return CommunicationStatsResponse(**stats)
