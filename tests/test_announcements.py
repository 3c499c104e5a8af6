from __future__ import annotations

from src.services import announcements


def test_welcome_message_greets_by_name_and_explains_claim() -> None:
    text = announcements.welcome_message("Ada", "the 27th of January, 2024")
    assert text.startswith("Hey Ada!")
    assert "the 27th of January, 2024" in text
    assert announcements.CLAIM_INSTRUCTIONS in text


def test_prompts_are_distinct_and_repeat_instructions() -> None:
    assert announcements.INVALID_EMAIL_PROMPT != announcements.DELIVERY_FAILED_PROMPT
    assert announcements.INVALID_EMAIL_PROMPT.endswith(announcements.CLAIM_INSTRUCTIONS)
    assert announcements.DELIVERY_FAILED_PROMPT.endswith(announcements.CLAIM_INSTRUCTIONS)
    assert "check your mail" in announcements.TICKET_SENT_MESSAGE


def test_ordinal_suffixes() -> None:
    assert [announcements.ordinal(d) for d in (1, 2, 3, 4, 11, 12, 13, 21, 22, 23, 27, 31)] == [
        "1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "23rd", "27th", "31st",
    ]


def test_long_date() -> None:
    assert announcements.long_date("2024-01-27") == "the 27th of January, 2024"
    assert announcements.long_date("2025-03-02") == "the 2nd of March, 2025"
