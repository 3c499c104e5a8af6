"""Transactional mail delivery of issued tickets."""
from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any, Callable, Dict, Tuple
from zoneinfo import ZoneInfo

import aiohttp

from ..core.config import AppConfig, LaunchEvent
from ..core.errors import MailDeliveryError
from .ticket_state import TicketRecord

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], aiohttp.ClientSession]


def event_window(event: LaunchEvent) -> Tuple[datetime, datetime]:
    """Timezone-aware start and end of the event."""
    zone = ZoneInfo(event.timezone)
    day = datetime.fromisoformat(event.date).date()
    start = datetime.combine(day, time.fromisoformat(event.start_time), tzinfo=zone)
    end = datetime.combine(day, time.fromisoformat(event.end_time), tzinfo=zone)
    return start, end


class MailClient:
    """Client for the transactional mail API.

    The response body is returned to the caller but not interpreted; only a
    non-2xx status counts as a failure.
    """

    def __init__(self, config: AppConfig, session_factory: SessionFactory = aiohttp.ClientSession):
        self.config = config
        self._session_factory = session_factory

    def build_payload(self, ticket: TicketRecord) -> Dict[str, Any]:
        """Compose the send request for a ticket that has an email and image link.

        Raises:
            MailDeliveryError: If the ticket has no email address or link yet.
        """
        if not ticket.email_address or not ticket.ticket_link:
            raise MailDeliveryError(f"Ticket for user {ticket.discord_user_id} is not ready to mail")
        cfg = self.config
        start, end = event_window(cfg.event)
        recipient_name = ticket.display_name
        return {
            "sender": {"email": cfg.sender_email, "name": cfg.sender_name},
            "recipients": {"name": recipient_name, "email": ticket.email_address},
            "calendarEvent": {
                "startDate": start.isoformat(),
                "endDate": end.isoformat(),
                "title": cfg.event.title,
                "location": cfg.event.location,
                "url": cfg.event.url,
                "organizer": cfg.event.organizer,
            },
            "subject": cfg.mail_subject,
            "template": {
                "id": cfg.mail_template_id,
                "variables": {"username": recipient_name},
            },
            "attachments": [
                f"{ticket.ticket_link}.png",
                cfg.promo_image_url,
            ],
        }

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.mail_project_secret}",
            "X-Project-Id": self.config.mail_project_id,
        }

    async def send_ticket(self, ticket: TicketRecord) -> Any:
        """Mail the ticket with its calendar invite.

        Raises:
            MailDeliveryError: On a non-2xx response.
        """
        payload = self.build_payload(ticket)
        async with self._session_factory() as session:
            async with session.post(self.config.mail_api_url, json=payload, headers=self._headers()) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    raise MailDeliveryError(f"Mail API error {response.status}: {error_text}", response.status)
                body = await response.json(content_type=None)
        logger.info("Mailed ticket #%s to user %s", ticket.ticket_number, ticket.discord_user_id)
        return body
