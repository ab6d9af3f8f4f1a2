"""Declarative query filters (fastapi-filter)."""

from .communication_log import CommunicationLogFilter

__all__ = ["CommunicationLogFilter"]
