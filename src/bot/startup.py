"""Helpers to start and configure the Discord bot.

This module centralizes the wiring of configuration, the ticket store and the
outbound API clients so the entrypoint can remain small and focused.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

import discord

from ..core.config import AppConfig, LoadConfig
from ..core.events import EventBus
from ..db.connection import Database
from ..db.migrations import EnsureMigrated
from ..security import mask_token, validate_discord_token
from ..services.diagnostics import DiagnosticsService
from ..services.mailer import MailClient
from ..services.messaging import DiscordMessenger
from ..services.persistence import TicketStore
from ..services.ticket_issuance import TicketDependencies
from ..services.ticket_renderer import TicketRenderer

logger = logging.getLogger(__name__)


def BuildIntents() -> discord.Intents:
    """Gateway intents for member joins and DM replies only."""
    intents = discord.Intents.none()
    intents.guilds = True
    intents.members = True
    intents.dm_messages = True
    intents.message_content = True
    return intents


@dataclass
class Runtime:
    """Everything the running bot holds on to."""
    config: AppConfig
    db: Database
    bus: EventBus
    store: TicketStore
    diagnostics: DiagnosticsService
    deps: TicketDependencies


def BuildRuntime(bot: discord.Client, config: AppConfig) -> Runtime:
    """Create the store and API clients for `bot` from an immutable config."""
    EnsureMigrated(config.database_url)
    db = Database(config.database_url)
    bus = EventBus()
    store = TicketStore(db)
    deps = TicketDependencies(
        config=config,
        store=store,
        messenger=DiscordMessenger(bot),
        renderer=TicketRenderer(config),
        mailer=MailClient(config),
    )
    diagnostics = DiagnosticsService(bus, db, store)
    return Runtime(config=config, db=db, bus=bus, store=store, diagnostics=diagnostics, deps=deps)


def RegisterRuntime(bot: discord.Client, runtime: Runtime) -> None:
    """Register runtime integrations for the bot.
    """
    from .. import events as events_module
    events_module.register_ticket_issuance(runtime.bus, runtime.deps)

    from .events import registry as bot_event_registry
    bot_event_registry.register_bot_events(bot, runtime)


def Run(bot: discord.Client, config: Optional[AppConfig] = None) -> None:
    """Validate configuration, wire the runtime and run the bot until stopped.

    Raises:
        ConfigurationError: If a required setting is missing.
        SystemExit: If the Discord token is malformed.
    """
    config = config or LoadConfig()
    validate_discord_token(config.discord_token)
    logger.info("Using token (masked): %s", mask_token(config.discord_token))

    runtime = BuildRuntime(bot, config)
    RegisterRuntime(bot, runtime)
    try:
        bot.run(config.discord_token, log_handler=None)
    finally:
        runtime.db.Dispose()
