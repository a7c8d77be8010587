"""Support ticket API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user, get_support_service
from src.schemas.support import (
    SupportTicketCreate,
    SupportTicketCreateResponse,
    SupportTicketResponse,
)
from src.services.auth import TokenClaims
from src.services.support_service import SupportService

router = APIRouter(prefix="/api/support", tags=["support"])


@router.post(
    "", response_model=SupportTicketCreateResponse, status_code=status.HTTP_201_CREATED
)
def submit_ticket(
    ticket_data: SupportTicketCreate,
    service: Annotated[SupportService, Depends(get_support_service)],
):
    """Submit a support ticket. No login required.

    Notification emails are sent in the background; if they cannot be
    queued the ticket is still saved and the response carries a warning.
    """
    ticket, warning = service.create_ticket(
        ticket_data.name,
        ticket_data.email,
        ticket_data.subject,
        ticket_data.message,
    )
    return SupportTicketCreateResponse(
        message="Support ticket submitted successfully. Check your email for confirmation.",
        ticket_id=ticket.id,
        warning=warning,
    )


@router.get("", response_model=list[SupportTicketResponse])
def list_tickets(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[SupportService, Depends(get_support_service)],
):
    """Get all support tickets.

    Any signed-in user may list tickets; there is no admin role.
    """
    return service.list_tickets()
