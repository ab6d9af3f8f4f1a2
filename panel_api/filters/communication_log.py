"""Declarative filter for communication logs."""

from typing import Optional

from fastapi_filter.contrib.sqlalchemy import Filter

from panel_api.models.communication_log import CommunicationLog


class CommunicationLogFilter(Filter):
    """Query-param filter for the ``GET /communication/logs`` endpoint."""

    type: Optional[str] = None
    status: Optional[str] = None
    user_id: Optional[str] = None
    order_by: Optional[list[str]] = None

    class Constants(Filter.Constants):
        model = CommunicationLog
