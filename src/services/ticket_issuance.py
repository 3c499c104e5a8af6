"""Ticket issuance: welcome on join, render and mail a ticket on email reply.

`handle(event_kind, payload, deps)` is the single entry point. `deps`
bundles the store, messenger, renderer and mailer so each can be replaced by a
fake in tests.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

from ..core.config import AppConfig
from ..core.errors import InvalidEmailError, TicketNotFoundError
from ..core.events import MEMBER_JOINED, MESSAGE_RECEIVED
from ..db.models import TicketStatus
from . import announcements
from .email_parser import parse_email
from .ticket_state import TicketRecord, advance, needs_render, status_of

logger = logging.getLogger(__name__)


class IssuanceOutcome(str, enum.Enum):
    WELCOMED = "welcomed"
    IGNORED = "ignored"
    INVALID_EMAIL = "invalid_email"
    TICKET_SENT = "ticket_sent"
    DELIVERY_FAILED = "delivery_failed"


@dataclass(frozen=True)
class JoinedMember:
    """User identity carried by a member-join gateway event."""
    user_id: int
    username: str
    global_name: Optional[str] = None
    avatar: Optional[str] = None

    @classmethod
    def FromPayload(cls, payload: Dict[str, Any]) -> "JoinedMember":
        return cls(
            user_id=int(payload["user_id"]),
            username=str(payload["username"]),
            global_name=payload.get("global_name") or None,
            avatar=payload.get("avatar") or None,
        )


@dataclass(frozen=True)
class IncomingMessage:
    """Fields of a message-create gateway event the ticket flow reads."""
    author_id: int
    channel_id: int
    content: str
    author_is_bot: bool = False
    author_avatar: Optional[str] = None

    @classmethod
    def FromPayload(cls, payload: Dict[str, Any]) -> "IncomingMessage":
        return cls(
            author_id=int(payload["author_id"]),
            channel_id=int(payload["channel_id"]),
            content=str(payload.get("content") or ""),
            author_is_bot=bool(payload.get("author_is_bot", False)),
            author_avatar=payload.get("author_avatar") or None,
        )


class TicketStoreLike(Protocol):
    def find_by_user_id(self, discord_user_id: int | str) -> Optional[TicketRecord]: ...
    def insert(self, discord_user_id: int | str, discord_dm_channel_id: int | str, username: str, name: Optional[str] = None) -> TicketRecord: ...
    def update_by_user_id(self, discord_user_id: int | str, *, email_address: Optional[str] = None, ticket_link: Optional[str] = None, status: Optional[TicketStatus] = None) -> Optional[TicketRecord]: ...


class MessengerLike(Protocol):
    async def open_dm_channel(self, user_id: int | str) -> int: ...
    async def send_message(self, channel_id: int | str, content: str, image_url: Optional[str] = None) -> None: ...


class RendererLike(Protocol):
    async def render(self, ticket: TicketRecord, avatar_hash: Optional[str] = None) -> str: ...


class MailerLike(Protocol):
    async def send_ticket(self, ticket: TicketRecord) -> Any: ...


@dataclass(frozen=True)
class TicketDependencies:
    """External collaborators of the issuance handler."""
    config: AppConfig
    store: TicketStoreLike
    messenger: MessengerLike
    renderer: RendererLike
    mailer: MailerLike


async def handle_member_joined(member: JoinedMember, deps: TicketDependencies) -> IssuanceOutcome:
    """Record a joining member (once) and DM them the launch invitation.

    Failures from Discord or the store propagate to the caller.
    """
    ticket = deps.store.find_by_user_id(member.user_id)
    if ticket is not None:
        logger.info("Member %s already has ticket #%s, reusing DM channel", member.user_id, ticket.ticket_number)
    else:
        advance(TicketStatus.NEW, TicketStatus.JOINED)
        channel_id = await deps.messenger.open_dm_channel(member.user_id)
        ticket = deps.store.insert(
            discord_user_id=member.user_id,
            discord_dm_channel_id=channel_id,
            username=member.username,
            name=member.global_name or member.username,
        )
        logger.info("Created ticket #%s for new member %s", ticket.ticket_number, member.user_id)

    content = announcements.welcome_message(
        ticket.display_name,
        announcements.long_date(deps.config.event.date),
    )
    channel_id = ticket.discord_dm_channel_id
    if not channel_id:
        # No cached DM channel on the record; open one without rewriting it.
        channel_id = await deps.messenger.open_dm_channel(member.user_id)
    await deps.messenger.send_message(channel_id, content, image_url=deps.config.promo_image_url)
    return IssuanceOutcome.WELCOMED


async def _issue_ticket(message: IncomingMessage, email: str, deps: TicketDependencies) -> TicketRecord:
    ticket = deps.store.find_by_user_id(message.author_id)
    if ticket is None:
        raise TicketNotFoundError(message.author_id)
    advance(status_of(ticket), TicketStatus.EMAIL_SUBMITTED)

    if needs_render(ticket):
        logger.info("Generating ticket image for user %s", message.author_id)
        ticket_link = await deps.renderer.render(ticket, message.author_avatar)
    else:
        logger.info("Ticket image for user %s already exists, skipping render", message.author_id)
        ticket_link = ticket.ticket_link or ""

    updated = deps.store.update_by_user_id(
        message.author_id,
        email_address=email,
        ticket_link=ticket_link,
        status=advance(TicketStatus.EMAIL_SUBMITTED, TicketStatus.TICKET_READY),
    )
    if updated is None:
        raise TicketNotFoundError(message.author_id)

    await deps.mailer.send_ticket(updated)
    notified = deps.store.update_by_user_id(
        message.author_id,
        status=advance(TicketStatus.TICKET_READY, TicketStatus.NOTIFIED),
    )
    return notified or updated


async def handle_message_received(message: IncomingMessage, deps: TicketDependencies) -> IssuanceOutcome:
    """Treat a DM as an email submission and deliver the ticket.

    Invalid addresses get the validation prompt without touching the store.
    Any failure after validation, including a missing ticket record, gets the
    single generic retry prompt.
    """
    if message.author_is_bot:
        return IssuanceOutcome.IGNORED

    try:
        email = parse_email(message.content)
    except InvalidEmailError as e:
        logger.info("Rejected email from user %s: %s", message.author_id, e)
        await deps.messenger.send_message(message.channel_id, announcements.INVALID_EMAIL_PROMPT)
        return IssuanceOutcome.INVALID_EMAIL

    try:
        ticket = await _issue_ticket(message, email, deps)
        logger.info("Ticket #%s delivered to user %s", ticket.ticket_number, message.author_id)
        await deps.messenger.send_message(message.channel_id, announcements.TICKET_SENT_MESSAGE)
    except TicketNotFoundError:
        logger.warning("Email received from user %s without a join record", message.author_id)
        await deps.messenger.send_message(message.channel_id, announcements.DELIVERY_FAILED_PROMPT)
        return IssuanceOutcome.DELIVERY_FAILED
    except Exception:
        logger.exception("Ticket delivery failed for user %s", message.author_id)
        await deps.messenger.send_message(message.channel_id, announcements.DELIVERY_FAILED_PROMPT)
        return IssuanceOutcome.DELIVERY_FAILED

    return IssuanceOutcome.TICKET_SENT


async def handle(event_kind: str, payload: Dict[str, Any], deps: TicketDependencies) -> IssuanceOutcome:
    """Dispatch one gateway event to the matching handler.

    Args:
        event_kind: MEMBER_JOINED or MESSAGE_RECEIVED.
        payload: Plain event data (see JoinedMember / IncomingMessage).
        deps: Collaborators to act through.

    Returns:
        IssuanceOutcome describing what the user saw.

    Raises:
        ValueError: For any other event kind.
    """
    if event_kind == MEMBER_JOINED:
        return await handle_member_joined(JoinedMember.FromPayload(payload), deps)
    if event_kind == MESSAGE_RECEIVED:
        return await handle_message_received(IncomingMessage.FromPayload(payload), deps)
    raise ValueError(f"Unsupported event kind: {event_kind}")
