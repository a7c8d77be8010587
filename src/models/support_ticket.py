"""Support ticket model."""

from sqlalchemy import Column, Integer, String, Text

from src.database import Base
from src.models.enums import TicketStatus
from src.models.mixins import CreatedAtMixin


class SupportTicket(Base, CreatedAtMixin):
    """A support request submitted through the contact form."""

    __tablename__ = "support_tickets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(String(20), nullable=False, default=TicketStatus.OPEN.value)  # 'open', 'closed'
