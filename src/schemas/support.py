"""Support ticket schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SupportTicketCreate(BaseModel):
    """Submit a support ticket."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr = Field(..., max_length=255)
    subject: str = Field(..., min_length=1, max_length=255)
    message: str = Field(..., min_length=1, max_length=10000)


class SupportTicketResponse(BaseModel):
    """Support ticket response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    subject: str
    message: str
    status: str
    created_at: datetime


class SupportTicketCreateResponse(BaseModel):
    """Response when submitting a support ticket.

    ``warning`` is set when the ticket was saved but its notification
    emails could not be queued.
    """

    message: str
    ticket_id: int
    warning: str | None = None
