"""Event handler registration modules.
"""

from typing import Callable, cast

from .ticket_issuance import register as _register_ticket_issuance

from ..core.events import EventBus
from ..services.ticket_issuance import TicketDependencies

register_ticket_issuance: Callable[[EventBus, TicketDependencies], None] = cast(
	Callable[[EventBus, TicketDependencies], None], _register_ticket_issuance
)
