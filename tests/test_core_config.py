"""Tests for core configuration modules."""

from __future__ import annotations

import os
from unittest.mock import patch
import pytest

from src.core.config import LoadConfig
from src.core.dynaconf_settings import _ReadEvent, GetSettings, AppConfig, LaunchEvent  # type: ignore
from src.core.errors import ConfigurationError, MissingSettingError

REQUIRED = {
    "DISCORD_TOKEN": "test_token_123",
    "PROJECT_SECRET": "mail_secret",
    "HTML_CONVERTER_API_KEY": "uid:key",
    "DATABASE_URL": "sqlite:///tickets.db",
}


def _settings_from(values: dict[str, object]):
    return lambda key, default=None: values.get(key, default)


def test_read_event_none_uses_defaults() -> None:
    assert _ReadEvent(None) == LaunchEvent()


def test_read_event_overrides_known_keys_only() -> None:
    event = _ReadEvent({"TITLE": "Demo Day", "date": "2025-03-01", "unknown": "x"})
    assert event.title == "Demo Day"
    assert event.date == "2025-03-01"
    assert event.location == LaunchEvent().location


@patch('src.core.dynaconf_settings.settings')
@patch.dict(os.environ, {}, clear=True)
def test_get_settings_basic(mock_settings) -> None:
    """Test GetSettings with all required values and some overrides."""
    mock_settings.get.side_effect = _settings_from({
        **REQUIRED,
        "MAIL_SUBJECT": "See you there",
        "RENDER_API_URL": "http://render.local/v1/image",
        "EVENT": {"title": "Demo Day"},
    })

    result = GetSettings()

    assert isinstance(result, AppConfig)
    assert result.discord_token == "test_token_123"
    assert result.mail_project_secret == "mail_secret"
    assert result.html_converter_api_key == "uid:key"
    assert result.database_url == "sqlite:///tickets.db"
    assert result.mail_subject == "See you there"
    assert result.render_api_url == "http://render.local/v1/image"
    assert result.event.title == "Demo Day"
    assert result.mail_template_id == "uJInmhVtnG9rthHcuDdvq"


@patch('src.core.dynaconf_settings.settings')
@patch.dict(os.environ, {"DISCORD_TOKEN": "env_token_456", "DATABASE_URL": "sqlite://"}, clear=True)
def test_get_settings_falls_back_to_unprefixed_env(mock_settings) -> None:
    mock_settings.get.side_effect = _settings_from({
        "PROJECT_SECRET": "s",
        "HTML_CONVERTER_API_KEY": "k",
    })

    result = GetSettings()

    assert result.discord_token == "env_token_456"
    assert result.database_url == "sqlite://"


@pytest.mark.parametrize("missing", sorted(REQUIRED))
@patch('src.core.dynaconf_settings.settings')
@patch.dict(os.environ, {}, clear=True)
def test_get_settings_requires_every_secret(mock_settings, missing: str) -> None:
    values = {k: v for k, v in REQUIRED.items() if k != missing}
    mock_settings.get.side_effect = _settings_from(values)

    with pytest.raises(MissingSettingError) as info:
        GetSettings()

    assert info.value.key == missing
    assert missing in str(info.value)


@patch('src.core.dynaconf_settings.settings')
@patch.dict(os.environ, {}, clear=True)
def test_get_settings_empty_string_counts_as_missing(mock_settings) -> None:
    mock_settings.get.side_effect = _settings_from({**REQUIRED, "PROJECT_SECRET": ""})

    with pytest.raises(MissingSettingError):
        GetSettings()


@patch('src.core.dynaconf_settings.settings')
def test_get_settings_reload(mock_settings) -> None:
    mock_settings.get.side_effect = _settings_from(REQUIRED)

    result = GetSettings(reload=True)

    mock_settings.reload.assert_called_once()
    assert result.discord_token == "test_token_123"


def test_app_config_is_immutable() -> None:
    cfg = AppConfig(discord_token="a.b.c", mail_project_secret="s", html_converter_api_key="k", database_url="sqlite://")
    with pytest.raises(Exception):
        cfg.discord_token = "other"  # type: ignore[misc]


@patch('src.core.config.GetSettings')
def test_load_config_wraps_unexpected_errors(mock_get) -> None:
    mock_get.side_effect = ValueError("bad toml")

    with pytest.raises(ConfigurationError, match="Failed to load configuration"):
        LoadConfig()


@patch('src.core.config.GetSettings')
def test_load_config_passes_missing_setting_through(mock_get) -> None:
    mock_get.side_effect = MissingSettingError("DATABASE_URL")

    with pytest.raises(MissingSettingError):
        LoadConfig()
