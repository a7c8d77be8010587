"""Email service for support ticket notifications over SMTP."""

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from html import escape

from src.config import get_settings
from src.exceptions import NotificationError

logger = logging.getLogger(__name__)

SUPPORT_TEAM_NAME = "Blog CMS Support Team"


@dataclass(frozen=True)
class TicketDetails:
    """Fields of a support ticket needed to render its emails."""

    ticket_id: int
    name: str
    email: str
    subject: str
    message: str
    submitted_at: str


class EmailService:
    """Service for sending HTML emails via the configured SMTP server."""

    def __init__(self) -> None:
        self.settings = get_settings()
        if self.settings.smtp_configured:
            logger.info(f"SMTP configured via {self.settings.smtp_host}:{self.settings.smtp_port}")
        else:
            logger.info("SMTP not configured, support emails disabled")

    @property
    def sender(self) -> str | None:
        return self.settings.mail_from or self.settings.smtp_username

    def send_email(self, to: str, subject: str, html: str, reply_to: str | None = None) -> None:
        """Send one HTML email.

        Raises:
            NotificationError: SMTP is not configured or delivery failed
        """
        if not self.settings.smtp_configured:
            raise NotificationError("SMTP not configured")

        msg = EmailMessage()
        try:
            msg["From"] = self.sender
            msg["To"] = to
            msg["Subject"] = subject
            if reply_to:
                msg["Reply-To"] = reply_to
        except ValueError as e:
            # CR/LF in a user-supplied header value
            raise NotificationError(f"Invalid email header for {to}: {e}") from e
        msg.set_content("This message requires an HTML capable email client.")
        msg.add_alternative(html, subtype="html")

        try:
            with smtplib.SMTP(self.settings.smtp_host, self.settings.smtp_port) as server:
                if self.settings.smtp_use_tls:
                    server.starttls()
                if self.settings.smtp_username and self.settings.smtp_password:
                    server.login(self.settings.smtp_username, self.settings.smtp_password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Failed to send email to {to}: {e}") from e

        logger.info(f"Email sent to {to}: {subject}")

    def send_ticket_to_operator(self, ticket: TicketDetails) -> None:
        """Forward a new ticket to the support inbox."""
        html = f"""
        <h2>New Support Ticket</h2>
        <p><strong>From:</strong> {escape(ticket.name)} ({escape(ticket.email)})</p>
        <p><strong>Subject:</strong> {escape(ticket.subject)}</p>
        <p><strong>Message:</strong></p>
        <p>{escape(ticket.message)}</p>
        <hr>
        <p><small>Ticket ID: {ticket.ticket_id}</small></p>
        <p><small>Submitted at: {escape(ticket.submitted_at)}</small></p>
        """
        self.send_email(
            self.settings.support_inbox,
            f"Support Ticket: {ticket.subject}",
            html,
            reply_to=ticket.email,
        )

    def send_ticket_confirmation(self, ticket: TicketDetails) -> None:
        """Confirm receipt of a ticket to the person who submitted it."""
        html = f"""
        <h2>Thank you for contacting us!</h2>
        <p>Hi {escape(ticket.name)},</p>
        <p>We've received your support ticket and will get back to you shortly.</p>
        <p><strong>Your message:</strong></p>
        <p>{escape(ticket.message)}</p>
        <hr>
        <p><strong>Ticket ID:</strong> {ticket.ticket_id}</p>
        <p>Best regards,<br>{SUPPORT_TEAM_NAME}</p>
        """
        self.send_email(ticket.email, f"Support Ticket Received - {ticket.subject}", html)


def get_email_service() -> EmailService:
    """Get an email service instance."""
    return EmailService()
