"""HTML-to-image rendering of personalised tickets."""
from __future__ import annotations

import html
import logging
from datetime import date
from typing import Any, Callable, Dict, Optional

import aiohttp

from ..core.config import AppConfig
from ..core.errors import RenderError
from .announcements import ordinal
from .ticket_state import TicketRecord
from .ticket_template import TICKET_HTML, TICKET_BACKGROUND_URL, HOST_LOGO_URL, PARTNER_LOGO_URL

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], aiohttp.ClientSession]

VIEWPORT_WIDTH = 1600
VIEWPORT_HEIGHT = 400
GOOGLE_FONTS = "Inter"
SITE_URL = "https://smtpexpress.com"


def avatar_url(discord_user_id: int | str, avatar_hash: Optional[str], fallback_url: str) -> str:
    """Discord CDN avatar for the user, or `fallback_url` when they have none."""
    if avatar_hash:
        return f"https://cdn.discordapp.com/avatars/{discord_user_id}/{avatar_hash}.png"
    return fallback_url


def _basic_auth(api_key: str) -> aiohttp.BasicAuth:
    """Rendering API keys are "user_id:api_key" pairs sent as HTTP basic auth."""
    login, _, password = api_key.partition(":")
    return aiohttp.BasicAuth(login, password)


class TicketRenderer:
    """Client for the HTML-to-image API.

    Each render opens a short-lived `aiohttp.ClientSession`; tests inject a
    stub through `session_factory`.
    """

    def __init__(self, config: AppConfig, session_factory: SessionFactory = aiohttp.ClientSession):
        self.config = config
        self._session_factory = session_factory

    def ticket_code(self, ticket: TicketRecord) -> str:
        return f"#{self.config.event.ticket_prefix}-{ticket.ticket_number}"

    def event_when(self) -> str:
        event = self.config.event
        day = date.fromisoformat(event.date)
        hour = int(event.start_time.split(":")[0])
        if hour == 12:
            start = "12 Noon"
        else:
            start = f"{hour % 12 or 12}{'PM' if hour >= 12 else 'AM'}"
        return f"{start} {day.strftime('%A')}, {ordinal(day.day)} {day.strftime('%B %Y')}"

    def build_html(self, ticket: TicketRecord, avatar_hash: Optional[str] = None) -> str:
        """Fill the ticket template for one attendee.

        Args:
            ticket: The attendee's ticket (name, username and number are used).
            avatar_hash: Discord avatar hash of the attendee, if any.

        Returns:
            Complete HTML document.
        """
        event = self.config.event
        values: Dict[str, str] = {
            "background_url": TICKET_BACKGROUND_URL,
            "host_logo_url": HOST_LOGO_URL,
            "partner_logo_url": PARTNER_LOGO_URL,
            "event_title": "The Express Hangout",
            "event_tag": "A Launch party",
            "event_when": self.event_when(),
            "event_location": event.location,
            "avatar_url": avatar_url(ticket.discord_user_id, avatar_hash, self.config.fallback_avatar_url),
            "name": ticket.display_name,
            "username": ticket.username or "",
            "site_url": SITE_URL,
            "ticket_code": self.ticket_code(ticket),
        }
        return TICKET_HTML.substitute({k: html.escape(v, quote=True) for k, v in values.items()})

    def build_payload(self, ticket: TicketRecord, avatar_hash: Optional[str] = None) -> Dict[str, Any]:
        return {
            "html": self.build_html(ticket, avatar_hash),
            "css": "",
            "google_fonts": GOOGLE_FONTS,
            "viewport_width": VIEWPORT_WIDTH,
            "viewport_height": VIEWPORT_HEIGHT,
        }

    async def render(self, ticket: TicketRecord, avatar_hash: Optional[str] = None) -> str:
        """Render the ticket and return the hosted image URL.

        Raises:
            RenderError: On a non-2xx response or a response without a URL.
        """
        payload = self.build_payload(ticket, avatar_hash)
        async with self._session_factory() as session:
            async with session.post(
                self.config.render_api_url,
                json=payload,
                auth=_basic_auth(self.config.html_converter_api_key),
            ) as response:
                if response.status >= 300:
                    error_text = await response.text()
                    raise RenderError(f"Rendering API error {response.status}: {error_text}", response.status)
                body = await response.json()

        url = body.get("url") if isinstance(body, dict) else None
        if not url:
            raise RenderError("Rendering API returned no image url", response.status)
        logger.info("Rendered ticket %s for user %s", self.ticket_code(ticket), ticket.discord_user_id)
        return str(url)
