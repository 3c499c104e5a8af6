from __future__ import annotations
from typing import Optional, Dict
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from sqlalchemy import func
from ..db.connection import Database
from ..db.models import Ticket, TicketStatus, GenerateTicketNumber
from .ticket_state import TicketRecord


class TicketStore:
    """Ticket collection backed by SQLAlchemy.

    Every method opens and closes its own session and returns detached
    `TicketRecord` snapshots. Concurrent updates to the same user are not
    serialized; the last commit wins.
    """

    def __init__(self, db: Database):
        self.db = db

    def find_by_user_id(self, discord_user_id: int | str) -> Optional[TicketRecord]:
        """Return the ticket for a Discord user, or None."""
        session: Session = self.db.GetSession()
        try:
            row = session.query(Ticket).filter(
                Ticket.discord_user_id == str(discord_user_id)
            ).first()
            return TicketRecord.FromModel(row) if row else None
        finally:
            session.close()

    def insert(
        self,
        discord_user_id: int | str,
        discord_dm_channel_id: int | str,
        username: str,
        name: Optional[str] = None,
    ) -> TicketRecord:
        """Create the ticket for a newly joined user.

        `name` falls back to `username`. A second insert for the same user
        violates the unique constraint and raises `IntegrityError`.
        """
        session: Session = self.db.GetSession()
        try:
            row = Ticket(
                ticket_number=GenerateTicketNumber(),
                discord_user_id=str(discord_user_id),
                discord_dm_channel_id=str(discord_dm_channel_id),
                username=username,
                name=name or username,
                created_at=datetime.now(tz=timezone.utc),
                status=TicketStatus.JOINED.value,
            )
            session.add(row)
            session.commit()
            session.refresh(row)
            return TicketRecord.FromModel(row)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def update_by_user_id(
        self,
        discord_user_id: int | str,
        *,
        email_address: Optional[str] = None,
        ticket_link: Optional[str] = None,
        status: Optional[TicketStatus] = None,
    ) -> Optional[TicketRecord]:
        """Update the given fields in place and return the post-update record.

        Fields passed as None are left untouched. Returns None when the user
        has no ticket.
        """
        session: Session = self.db.GetSession()
        try:
            row = session.query(Ticket).filter(
                Ticket.discord_user_id == str(discord_user_id)
            ).first()
            if row is None:
                return None
            if email_address is not None:
                setattr(row, "email_address", email_address)
            if ticket_link is not None:
                setattr(row, "ticket_link", ticket_link)
            if status is not None:
                setattr(row, "status", status.value)
            session.commit()
            return TicketRecord.FromModel(row)
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def set_status(self, discord_user_id: int | str, status: TicketStatus) -> Optional[TicketRecord]:
        return self.update_by_user_id(discord_user_id, status=status)

    def count_by_status(self) -> Dict[str, int]:
        """Ticket counts keyed by status value (statuses with no tickets omitted)."""
        session: Session = self.db.GetSession()
        try:
            rows = session.query(Ticket.status, func.count(Ticket.id)).group_by(Ticket.status).all()
            return {str(status): int(count) for status, count in rows}
        finally:
            session.close()
