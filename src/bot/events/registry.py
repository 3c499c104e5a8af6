"""Registry for Discord bot event handlers.
"""
from __future__ import annotations

from typing import Any, Dict, TYPE_CHECKING
import discord
import logging

from ...core.events import BOT_STARTED, MEMBER_JOINED, MESSAGE_RECEIVED

if TYPE_CHECKING:
    from ..startup import Runtime

logger = logging.getLogger(__name__)


def member_payload(member: discord.Member) -> Dict[str, Any]:
    """Plain payload for a member-join event."""
    return {
        "user_id": member.id,
        "username": member.name,
        "global_name": getattr(member, "global_name", None),
        "avatar": member.avatar.key if member.avatar else None,
        "guild_id": member.guild.id,
    }


def message_payload(message: discord.Message) -> Dict[str, Any]:
    """Plain payload for a message-create event."""
    author = message.author
    return {
        "discord_message_id": message.id,
        "channel_id": message.channel.id,
        "author_id": author.id,
        "author_is_bot": author.bot,
        "author_avatar": author.avatar.key if author.avatar else None,
        "content": message.content,
        "created_at": message.created_at.isoformat(),
    }


def register_bot_events(bot: discord.Client, runtime: "Runtime") -> None:
    """Attach event handlers to the provided bot instance.
    """

    @bot.event
    async def on_ready() -> None:
        logger.info("Logged in as %s (guilds=%d)", bot.user, len(bot.guilds))
        await runtime.bus.Emit(BOT_STARTED, {"user": str(bot.user)}, {})
        await runtime.diagnostics.run_startup()

    @bot.event
    async def on_member_join(member: discord.Member) -> None:
        await runtime.bus.Emit(MEMBER_JOINED, member_payload(member), {"guild_id": member.guild.id})

    @bot.event
    async def on_message(message: discord.Message) -> None:
        if message.author.bot:
            return
        await runtime.bus.Emit(MESSAGE_RECEIVED, message_payload(message), {})
