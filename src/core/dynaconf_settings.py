from dataclasses import dataclass, field
from typing import Any, Optional
import os

from dynaconf import Dynaconf  # type: ignore

from .errors import MissingSettingError

settings: Dynaconf = Dynaconf(  # type: ignore
    settings_files=["settings.toml", ".secrets.toml"],
    environments=True,           # allow [default], [development], [production], [testing]
    envvar_prefix="BOT",         # env vars like BOT_DATABASE_URL etc.
    load_dotenv=True,            # read .env file if present
    env_switcher="DYNACONF_ENV", # switch env with DYNACONF_ENV=testing
)

# Settings the bot refuses to start without. Order matches the startup checks.
REQUIRED_SETTINGS: tuple[str, ...] = (
    "DISCORD_TOKEN",
    "PROJECT_SECRET",
    "HTML_CONVERTER_API_KEY",
    "DATABASE_URL",
)


@dataclass(frozen=True)
class LaunchEvent:
    """Details of the event the tickets admit to.

    Used for the calendar invite in the confirmation mail. `start_time` and
    `end_time` are wall-clock times in `timezone` on `date`.
    """
    title: str = "SMTP Express Launch Party!"
    location: str = "Opolo Innovation Hub, OAU Campus, Ile-ife"
    url: str = "https://maps.app.goo.gl/fYRvgJZ6FV1XAPJc8"
    organizer: str = "thesmtpexpress@gmail.com"
    date: str = "2024-01-27"  # ISO date of the event
    start_time: str = "12:00"
    end_time: str = "14:00"
    timezone: str = "Africa/Lagos"  # IANA zone the times are expressed in
    ticket_prefix: str = "2701"  # Printed before the ticket number, e.g. #2701-42


@dataclass(frozen=True)
class AppConfig:
    """Configuration class holding all application settings.

    Built once at startup and passed to every component. The four secrets are
    required; everything else has defaults matching the launch campaign.
    """
    discord_token: str  # The Discord bot authentication token
    mail_project_secret: str  # Transactional mail API project secret
    html_converter_api_key: str  # Rendering API key in "user_id:api_key" form
    database_url: str  # SQLAlchemy connection URL for the ticket store
    mail_project_id: str = "sm0pid-MPdonhpAAaCW5wbZyMACYAzWY"
    mail_api_url: str = "https://api.smtpexpress.com/send"
    render_api_url: str = "https://hcti.io/v1/image"
    sender_email: str = "tenotea@smtpexpress.com"
    sender_name: str = "Tenotea from SMTP Express"
    mail_subject: str = "Join us for our Launch Party!"
    mail_template_id: str = "uJInmhVtnG9rthHcuDdvq"
    promo_image_url: str = "https://res.cloudinary.com/devtenotea/image/upload/v1704800450/smtp-express-launch-party.png"
    fallback_avatar_url: str = (
        "https://unsplash.com/photos/0zQTksqA_Ws/download"
        "?ixid=M3wxMjA3fDB8MXxhbGx8M3x8fHx8fDJ8fDE3MDQ4NDg0NTR8&force=true&w=640"
    )
    event: LaunchEvent = field(default_factory=LaunchEvent)  # Event shown on tickets and invites


def _ReadRequired(key: str) -> str:
    """Read a required setting, falling back to the unprefixed OS environment.

    Args:
        key: Setting name, e.g. "DISCORD_TOKEN".

    Returns:
        str: The non-empty value.

    Raises:
        MissingSettingError: If neither source provides a value.
    """
    value: Any = settings.get(key, None)  # type: ignore[arg-type]
    if value in (None, ""):
        value = os.environ.get(key, "")
    if value in (None, ""):
        raise MissingSettingError(key)
    return f"{value}"


def _ReadEvent(raw: Optional[Any]) -> LaunchEvent:
    """Build a LaunchEvent from an optional settings table.

    Example:
        _ReadEvent({"title": "Demo Day"}) -> LaunchEvent(title="Demo Day", ...)
    """
    if not raw:
        return LaunchEvent()
    known = LaunchEvent.__dataclass_fields__.keys()
    values = {str(k).lower(): str(v) for k, v in dict(raw).items()}
    return LaunchEvent(**{k: v for k, v in values.items() if k in known})


def GetSettings(reload: bool = False) -> AppConfig:
    """
    Return AppConfig built from Dynaconf's settings.

    Args:
        reload: Whether to reload files and environment (useful in tests). Defaults to False.

    Returns:
        AppConfig: Configuration instance with loaded values.

    Raises:
        MissingSettingError: If a required secret or connection string is absent.
        RuntimeError: If any other value cannot be read.

    Example:
        config = GetSettings()
        config = GetSettings(reload=True)  # Reload settings
    """
    if reload:
        settings.reload()  # type: ignore

    discord_token = _ReadRequired("DISCORD_TOKEN")
    mail_project_secret = _ReadRequired("PROJECT_SECRET")
    html_converter_api_key = _ReadRequired("HTML_CONVERTER_API_KEY")
    database_url = _ReadRequired("DATABASE_URL")

    try:
        defaults = AppConfig(
            discord_token=discord_token,
            mail_project_secret=mail_project_secret,
            html_converter_api_key=html_converter_api_key,
            database_url=database_url,
        )
        return AppConfig(
            discord_token=discord_token,
            mail_project_secret=mail_project_secret,
            html_converter_api_key=html_converter_api_key,
            database_url=database_url,
            mail_project_id=str(settings.get("MAIL_PROJECT_ID", defaults.mail_project_id)),  # type: ignore
            mail_api_url=str(settings.get("MAIL_API_URL", defaults.mail_api_url)),  # type: ignore
            render_api_url=str(settings.get("RENDER_API_URL", defaults.render_api_url)),  # type: ignore
            sender_email=str(settings.get("SENDER_EMAIL", defaults.sender_email)),  # type: ignore
            sender_name=str(settings.get("SENDER_NAME", defaults.sender_name)),  # type: ignore
            mail_subject=str(settings.get("MAIL_SUBJECT", defaults.mail_subject)),  # type: ignore
            mail_template_id=str(settings.get("MAIL_TEMPLATE_ID", defaults.mail_template_id)),  # type: ignore
            promo_image_url=str(settings.get("PROMO_IMAGE_URL", defaults.promo_image_url)),  # type: ignore
            fallback_avatar_url=str(settings.get("FALLBACK_AVATAR_URL", defaults.fallback_avatar_url)),  # type: ignore
            event=_ReadEvent(settings.get("EVENT", None)),  # type: ignore
        )
    except Exception as e:
        raise RuntimeError(f"Failed to load settings: {e}") from e
