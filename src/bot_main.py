"""Discord bot entrypoint: wires configuration, the ticket store and gateway event handling."""

import discord
import logging

from .bot import startup
from .core.errors import ConfigurationError

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s", force=True)

bot = discord.Client(intents=startup.BuildIntents())


def Run() -> None:
    """Main entry to launch the Discord bot after configuration checks.

    Raises:
        SystemExit: If a required setting is missing or the Discord token is malformed.

    Example:
        Run()  # Launches the bot if configuration is complete
    """
    try:
        startup.Run(bot)
    except ConfigurationError as e:
        raise SystemExit(str(e)) from e


if __name__ == "__main__":
    Run()
