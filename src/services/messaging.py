"""Discord REST operations used by the ticket flow."""
from __future__ import annotations

from typing import Optional

import discord


class DiscordMessenger:
    """Opens DM channels and posts messages through a `discord.Client`."""

    def __init__(self, client: discord.Client):
        self.client = client

    async def open_dm_channel(self, user_id: int | str) -> int:
        """Create (or fetch) the DM channel with a user and return its id."""
        user = self.client.get_user(int(user_id)) or await self.client.fetch_user(int(user_id))
        channel = await user.create_dm()
        return channel.id

    async def send_message(self, channel_id: int | str, content: str, image_url: Optional[str] = None) -> None:
        """Post `content` to a channel, with an image embed when `image_url` is given."""
        channel = self.client.get_partial_messageable(int(channel_id))
        if image_url:
            embed = discord.Embed().set_image(url=image_url)
            await channel.send(content, embed=embed)
        else:
            await channel.send(content)
