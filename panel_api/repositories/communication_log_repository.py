"""Repository for the append-only communication log."""

from datetime import datetime
from typing import Any

from sqlalchemy import case, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session

from panel_api.filters.communication_log import CommunicationLogFilter
from panel_api.models.communication_log import (
    CommunicationLog,
    CommunicationStatus,
    CommunicationType,
)


class CommunicationLogRepository:
    """Async data access layer for communication logs."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, **kwargs: Any) -> CommunicationLog:
        log = CommunicationLog(**kwargs)
        self.session.add(log)
        await self.session.flush()
        await self.session.refresh(log)
        return log

    async def get_all(self, filters: CommunicationLogFilter, limit: int = 100) -> list[CommunicationLog]:
        """Newest-first logs matching *filters*."""
        query = filters.filter(select(CommunicationLog))
        query = filters.sort(query)
        if not filters.order_by:
            query = query.order_by(CommunicationLog.sent_at.desc())
        result = await self.session.execute(query.limit(limit))
        return list(result.scalars().all())

    async def get_stats(
        self,
        type: CommunicationType | None = None,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, int]:
        """Count logs by status, optionally limited to *type* and ``[start, end]``."""
        conditions = []
        if type is not None:
            conditions.append(CommunicationLog.type == type.value)
        if start is not None:
            conditions.append(CommunicationLog.sent_at >= start)
        if end is not None:
            conditions.append(CommunicationLog.sent_at <= end)

        result = await self.session.execute(
            select(
                func.count().label("total"),
                *(
                    func.coalesce(
                        func.sum(case((CommunicationLog.status == status.value, 1), else_=0)), 0
                    ).label(status.value)
                    for status in CommunicationStatus
                ),
            ).where(*conditions)
        )
        row = result.one()
        return {
            "total": int(row.total or 0),
            **{status.value: int(getattr(row, status.value) or 0) for status in CommunicationStatus},
        }


class SyncCommunicationLogRepository:
    """Synchronous variant used by Celery maintenance tasks."""

    def __init__(self, session: Session):
        self.session = session

    def purge_older_than(self, cutoff: datetime) -> int:
        result = self.session.execute(
            delete(CommunicationLog).where(CommunicationLog.sent_at < cutoff)
        )
        return result.rowcount  # pyright: ignore[reportAttributeAccessIssue]
