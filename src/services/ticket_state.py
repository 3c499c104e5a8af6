"""Ticket issuance state machine.

NEW -> JOINED -> EMAIL_SUBMITTED -> TICKET_READY -> NOTIFIED

A user may resubmit an email at any time after joining, so TICKET_READY and
NOTIFIED both lead back to EMAIL_SUBMITTED. A failed delivery leaves the
ticket where it was, which is why EMAIL_SUBMITTED may be entered repeatedly.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Mapping, FrozenSet

from ..core.errors import InvalidTransitionError
from ..db.models import Ticket, TicketStatus

ALLOWED_TRANSITIONS: Mapping[TicketStatus, FrozenSet[TicketStatus]] = {
    TicketStatus.NEW: frozenset({TicketStatus.JOINED}),
    TicketStatus.JOINED: frozenset({TicketStatus.EMAIL_SUBMITTED}),
    TicketStatus.EMAIL_SUBMITTED: frozenset({TicketStatus.EMAIL_SUBMITTED, TicketStatus.TICKET_READY}),
    TicketStatus.TICKET_READY: frozenset({TicketStatus.EMAIL_SUBMITTED, TicketStatus.NOTIFIED}),
    TicketStatus.NOTIFIED: frozenset({TicketStatus.EMAIL_SUBMITTED}),
}


@dataclass(frozen=True)
class TicketRecord:
    """Detached, immutable snapshot of a `tickets` row."""
    discord_user_id: str
    ticket_number: str
    status: TicketStatus
    ticket_link: Optional[str] = None
    email_address: Optional[str] = None
    name: Optional[str] = None
    username: Optional[str] = None
    discord_dm_channel_id: Optional[str] = None
    created_at: Optional[datetime] = None
    is_present: Optional[bool] = None

    @classmethod
    def FromModel(cls, row: Ticket) -> "TicketRecord":
        return cls(
            discord_user_id=str(row.discord_user_id),
            ticket_number=str(row.ticket_number),
            status=TicketStatus(row.status),
            ticket_link=row.ticket_link,  # type: ignore[arg-type]
            email_address=row.email_address,  # type: ignore[arg-type]
            name=row.name,  # type: ignore[arg-type]
            username=row.username,  # type: ignore[arg-type]
            discord_dm_channel_id=row.discord_dm_channel_id,  # type: ignore[arg-type]
            created_at=row.created_at,  # type: ignore[arg-type]
            is_present=row.is_present,  # type: ignore[arg-type]
        )

    @property
    def display_name(self) -> str:
        """Name used on the ticket and in mail: stored name, else username."""
        return self.name or self.username or ""


def status_of(ticket: Optional[TicketRecord]) -> TicketStatus:
    return TicketStatus.NEW if ticket is None else ticket.status


def can_transition(current: TicketStatus, target: TicketStatus) -> bool:
    return target in ALLOWED_TRANSITIONS.get(current, frozenset())


def advance(current: TicketStatus, target: TicketStatus) -> TicketStatus:
    """Return `target` if reachable from `current`.

    Raises:
        InvalidTransitionError: If the transition is not declared.
    """
    if not can_transition(current, target):
        raise InvalidTransitionError(f"Cannot move ticket from {current.value} to {target.value}")
    return target


def needs_render(ticket: TicketRecord) -> bool:
    """Guard for the image step: a recorded ticket link is never regenerated."""
    return not ticket.ticket_link
