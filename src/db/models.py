import enum
import random

from sqlalchemy import Column, Integer, String, DateTime, Boolean, UniqueConstraint, Index
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class TicketStatus(str, enum.Enum):
    """Issuance state of a ticket. A user without a row is implicitly NEW."""
    NEW = "new"
    JOINED = "joined"  # record created, welcome DM sent
    EMAIL_SUBMITTED = "email_submitted"  # valid email parsed, image not yet confirmed
    TICKET_READY = "ticket_ready"  # email and image link persisted
    NOTIFIED = "notified"  # confirmation mail sent


def GenerateTicketNumber() -> str:
    """Short numeric ticket number in the range "0".."1000"."""
    return str(round(random.random() * 1000))


class Ticket(Base):
    """Launch-party ticket issued to one Discord user."""
    __tablename__ = 'tickets'

    id = Column(Integer, primary_key=True, autoincrement=True)
    ticket_number = Column(String, nullable=False, default=GenerateTicketNumber)
    ticket_link = Column(String)
    email_address = Column(String)
    name = Column(String)
    username = Column(String)
    discord_user_id = Column(String, nullable=False)
    discord_dm_channel_id = Column(String)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    is_present = Column(Boolean)
    status = Column(String, nullable=False, default=TicketStatus.JOINED.value)

    # Constraints and indexes
    __table_args__ = (
        UniqueConstraint('discord_user_id'),
        Index('idx_tickets_status', 'status'),
    )

    def __repr__(self) -> str:
        return (
            f"<Ticket id={self.id} user={self.discord_user_id} number={self.ticket_number} "
            f"status={self.status} link={self.ticket_link}>"
        )
