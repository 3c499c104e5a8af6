"""Ticket issuance event handlers.

Subscribes the issuance handler to the gateway events published by the bot
registry, plus a wildcard subscriber that logs each event type.
"""
from __future__ import annotations

import logging

from ..core.events import EventBus, Event, MEMBER_JOINED, MESSAGE_RECEIVED
from ..services import ticket_issuance
from ..services.ticket_issuance import IssuanceOutcome, TicketDependencies

logger = logging.getLogger(__name__)


def register(bus: EventBus, deps: TicketDependencies) -> None:
    """Attach handlers for member joins and incoming messages.

    Args:
        bus: The shared EventBus instance.
        deps: Collaborators the issuance handler acts through.
    """

    async def handle_gateway_event(event: Event) -> IssuanceOutcome:
        return await ticket_issuance.handle(event.type, event.payload, deps)

    async def log_event(event: Event) -> None:
        logger.info("%s %s", event.type, event.correlation_id)

    bus.Subscribe(MEMBER_JOINED, handle_gateway_event)
    bus.Subscribe(MESSAGE_RECEIVED, handle_gateway_event)
    bus.SubscribeAll(log_event)
