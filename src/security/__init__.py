"""Security utilities: token validation and masking.

Exports:
- validate_discord_token
- mask_token
"""

from .token import validate_discord_token, mask_token

__all__ = [
    "validate_discord_token",
    "mask_token",
]
