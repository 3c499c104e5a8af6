"""Tests for security utilities."""
from __future__ import annotations

import pytest

from src.security import mask_token, validate_discord_token


def test_validate_discord_token_valid() -> None:
    # Discord tokens have 3 parts separated by '.'; content is not validated here.
    validate_discord_token("aaaa.bbbb.cccc")


@pytest.mark.parametrize("token", ["", "changeme", "CHANGEME", None, "one.two"])  # type: ignore[list-item]
def test_validate_discord_token_invalid(token) -> None:  # type: ignore[no-untyped-def]
    with pytest.raises(SystemExit):
        validate_discord_token(token)  # type: ignore[arg-type]


def test_mask_token_hides_middle() -> None:
    masked = mask_token("MTIzNDU2.Gabcde.secretpartXYZW")
    assert masked == "MTIz...XYZW"
    assert "secretpart" not in masked
