"""Exception hierarchy shared by configuration, services and event handlers."""
from __future__ import annotations

from typing import Optional


class TicketBotError(Exception):
    """Base exception for the ticket bot."""


class ConfigurationError(TicketBotError):
    """Raised when configuration cannot be loaded or is incomplete."""


class MissingSettingError(ConfigurationError):
    """Raised at startup when a required secret or connection string is absent."""

    def __init__(self, key: str):
        super().__init__(f"Cannot initialize bot without {key}. Set your environment variable.")
        self.key = key  # Name of the missing setting


class InvalidEmailError(TicketBotError):
    """Raised when a message body is not a usable email address."""


class TicketNotFoundError(TicketBotError):
    """Raised when a user submits an email without a prior join record."""

    def __init__(self, discord_user_id: int | str):
        super().__init__(f"No ticket recorded for user {discord_user_id}")
        self.discord_user_id = str(discord_user_id)


class InvalidTransitionError(TicketBotError):
    """Raised when a ticket is moved to a state its current state cannot reach."""


class ExternalServiceError(TicketBotError):
    """Raised when an outbound HTTP API call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code  # HTTP status returned, if any


class RenderError(ExternalServiceError):
    """Raised when the HTML-to-image API does not return an image URL."""


class MailDeliveryError(ExternalServiceError):
    """Raised when the transactional mail API rejects a send."""
