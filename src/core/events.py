"""Lightweight asynchronous in-process event bus.

Provides an `Event` data structure and an `EventBus` with subscribe/emit semantics.
Discord gateway callbacks publish `MemberJoined` and `MessageReceived` events;
the ticket issuance handler subscribes to them and a wildcard subscriber logs
every event type.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Coroutine, Dict, List, Optional, cast
import uuid

MEMBER_JOINED = "MemberJoined"
MESSAGE_RECEIVED = "MessageReceived"
BOT_STARTED = "BotStarted"
DIAGNOSTICS_COMPLETED = "DiagnosticsCompleted"


@dataclass(slots=True)
class Event:
    """Represents a domain event published on the internal bus.

    Attributes:
        type: Event name (e.g. "MemberJoined").
        payload: Event data dictionary (plain ids and strings, no discord.py objects).
        context: Out-of-band metadata (trace IDs, guild info, etc.).
        timestamp: UTC creation time.
        correlation_id: Unique id for tracing event flow.
        results: Values returned by the type-specific handlers, in call order.
    """
    type: str  # Event name identifier
    payload: Dict[str, Any]  # Serializable event data
    context: Dict[str, Any] = field(default_factory=lambda: cast(Dict[str, Any], {}))  # Metadata for tracing
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))  # UTC creation time
    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex)  # Unique tracing ID
    results: List[Any] = field(default_factory=lambda: cast(List[Any], []))  # Handler return values


Handler = Callable[[Event], Coroutine[Any, Any, Any]]  # Type alias for event handler functions


class EventBus:
    """Simple async event bus.

    Handlers are awaited sequentially; if one raises it propagates upward.
    Wildcard handlers receive all events after the type-specific handlers.
    """
    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}  # Handlers for specific event types
        self._wildcard: List[Handler] = []  # Wildcard handlers for all events

    def Subscribe(self, event_type: str, handler: Handler) -> None:
        """Register a handler for a specific event type.

        Args:
            event_type: The event type to listen for.
            handler: The async function to call when the event is published.

        Example:
            async def greet(event):
                print(f"Welcome {event.payload['username']}")

            bus.Subscribe(MEMBER_JOINED, greet)
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def SubscribeAll(self, handler: Handler) -> None:
        """Register a wildcard handler that sees every event."""
        self._wildcard.append(handler)

    def HandlerCount(self, event_type: str) -> int:
        """Number of type-specific handlers registered for `event_type`."""
        return len(self._handlers.get(event_type, []))

    async def Publish(self, event: Event) -> Event:
        """Publish a pre-built Event to matching handlers.

        Return values of the type-specific handlers are appended to
        `event.results`; wildcard handler results are discarded.

        Args:
            event: The event instance to publish.

        Returns:
            Event: The same event, with `results` filled in.

        Raises:
            RuntimeError: Wrapping the first handler failure.
        """
        try:
            for h in list(self._handlers.get(event.type, [])):
                event.results.append(await h(event))
            for h in list(self._wildcard):
                await h(event)
        except Exception as e:
            raise RuntimeError(f"Failed to publish event {event.type}: {e}") from e
        return event

    async def Emit(self, type: str, payload: Dict[str, Any], context: Optional[Dict[str, Any]] = None) -> Event:
        """Create and publish an Event in one call.

        Args:
            type: The event type name.
            payload: The event data dictionary.
            context: Optional metadata dictionary.

        Returns:
            Event: The created event instance for tracing/testing.

        Example:
            event = await bus.Emit(MEMBER_JOINED, {"user_id": 42, "username": "ada"})
            outcome = event.results[0]
        """
        ev = Event(type=type, payload=payload, context=context or {})
        return await self.Publish(ev)
