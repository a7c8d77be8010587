"""Celery task for support ticket email notifications."""

import logging

from src.celery_app import app as celery_app
from src.exceptions import NotificationError
from src.services.email_service import EmailService, TicketDetails

logger = logging.getLogger(__name__)


@celery_app.task(name="tasks.send_support_ticket_emails")
def send_support_ticket_emails(
    ticket_id: int,
    name: str,
    email: str,
    subject: str,
    message: str,
    submitted_at: str,
) -> dict:
    """Email a new ticket to the support inbox and a confirmation to its submitter.

    Each email is attempted once; a failure of one does not stop the other.

    Returns:
        dict with the recipients reached and the failures encountered
    """
    ticket = TicketDetails(
        ticket_id=ticket_id,
        name=name,
        email=email,
        subject=subject,
        message=message,
        submitted_at=submitted_at,
    )
    service = EmailService()
    result: dict = {"ticket_id": ticket_id, "sent": [], "failed": []}

    for kind, send in (
        ("operator", service.send_ticket_to_operator),
        ("confirmation", service.send_ticket_confirmation),
    ):
        try:
            send(ticket)
            result["sent"].append(kind)
        except NotificationError as e:
            logger.error(f"Support ticket {ticket_id}: {kind} email failed: {e.message}")
            result["failed"].append({"email": kind, "error": e.message})

    if result["failed"]:
        logger.warning(
            f"Support ticket {ticket_id} notifications incomplete: "
            f"{len(result['sent'])} sent, {len(result['failed'])} failed"
        )
    return result
