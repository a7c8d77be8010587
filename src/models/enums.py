"""Enums for model fields."""

from enum import Enum


class TicketStatus(str, Enum):
    """Lifecycle states of a support ticket."""

    OPEN = "open"
    CLOSED = "closed"
