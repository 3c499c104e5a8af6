"""User-facing message text for the ticket flow."""
from __future__ import annotations

from datetime import date

CLAIM_INSTRUCTIONS = (
    "To claim your ticket, respond to this message with your email address "
    "and your ticket will be sent to your mailbox."
)

INVALID_EMAIL_PROMPT = (
    "That doesn't seem look like a valid email address.\n\n"
    f"{CLAIM_INSTRUCTIONS}"
)

DELIVERY_FAILED_PROMPT = (
    "Looks like that mail did not get sent. Please try again.\n\n"
    f"{CLAIM_INSTRUCTIONS}"
)

TICKET_SENT_MESSAGE = "Kindly check your mail, your ticket has been sent!"


def ordinal(day: int) -> str:
    """1 -> "1st", 12 -> "12th", 22 -> "22nd"."""
    if 10 <= day % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{day}{suffix}"


def long_date(iso_date: str) -> str:
    """Format "2024-01-27" as "the 27th of January, 2024"."""
    parsed = date.fromisoformat(iso_date)
    return f"the {ordinal(parsed.day)} of {parsed.strftime('%B')}, {parsed.year}"


def welcome_message(name: str, event_date_line: str = "the 27th of January, 2024") -> str:
    """Launch invitation DM sent when a member joins.

    Args:
        name: Name stored on the member's ticket.
        event_date_line: Human readable event date.
    """
    return (
        f"Hey {name}!\n\n"
        "Welcome to the SMTP Express Discord Server, where the elite hangout 😌.\n\n"
        "I am the Express bot and I am officially inviting you, on behalf of the entire SMTP Express team, "
        f"to join us for our product launch happening on {event_date_line}.\n\n"
        "As a member of our discord server, you are eligible for a free ticket to the launch party.\n\n"
        f"{CLAIM_INSTRUCTIONS}\n\n"
        "See you there!!"
    )
