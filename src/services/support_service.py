"""Support ticket service."""

import logging
from datetime import UTC, datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import InternalError
from src.models.enums import TicketStatus
from src.models.support_ticket import SupportTicket

logger = logging.getLogger(__name__)

NOTIFICATION_WARNING = "Ticket saved, but confirmation emails could not be sent."


class SupportService:
    """Service for support ticket operations."""

    def __init__(self, db: Session):
        self.db = db

    def create_ticket(
        self, name: str, email: str, subject: str, message: str
    ) -> tuple[SupportTicket, str | None]:
        """Save a ticket and queue its notification emails.

        The ticket is committed before anything is queued, so a queueing
        failure never loses it. Returns the ticket and a warning message
        when the emails could not be queued.
        """
        ticket = SupportTicket(
            name=name,
            email=email,
            subject=subject,
            message=message,
            status=TicketStatus.OPEN.value,
        )
        self.db.add(ticket)
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Support ticket error: {e}")
            raise InternalError("Error submitting ticket") from e
        self.db.refresh(ticket)
        logger.info(f"Created support ticket {ticket.id}")

        return ticket, self._queue_notifications(ticket)

    def _queue_notifications(self, ticket: SupportTicket) -> str | None:
        from src.tasks.support_notifications import send_support_ticket_emails

        submitted_at = (ticket.created_at or datetime.now(UTC)).isoformat()
        try:
            send_support_ticket_emails.delay(
                ticket.id,
                ticket.name,
                ticket.email,
                ticket.subject,
                ticket.message,
                submitted_at,
            )
        except Exception:
            logger.exception(f"Failed to queue notifications for support ticket {ticket.id}")
            return NOTIFICATION_WARNING
        return None

    def list_tickets(self) -> list[SupportTicket]:
        """Return every ticket, newest first."""
        return (
            self.db.query(SupportTicket)
            .order_by(SupportTicket.created_at.desc(), SupportTicket.id.desc())
            .all()
        )
