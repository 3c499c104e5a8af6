"""Discord bot token checks used before the gateway connection is opened."""
from __future__ import annotations

from typing import Optional


def validate_discord_token(token: Optional[str]) -> None:
    """Reject placeholder or malformed bot tokens and raise SystemExit.

    Args:
        token: The configured DISCORD_TOKEN value.

    Raises:
        SystemExit: If token is empty, still the placeholder, or not three dotted parts.
    """
    if not token or token.strip().lower() == "changeme":
        raise SystemExit("DISCORD_TOKEN is empty or still set to the placeholder value")
    if token.count('.') != 2:
        raise SystemExit(
            "DISCORD_TOKEN should look like <id>.<timestamp>.<hmac>; copy the bot token, not the client secret."
        )


def mask_token(token: str) -> str:
    """Keep the first 4 and last 4 characters of a dotted token for logs.

    Example:
        mask_token("abcdefgh.x.zyxwvuts") -> "abcd...vuts"
    """
    token_parts = token.split('.')
    return token_parts[0][:4] + "..." + token_parts[-1][-4:]
