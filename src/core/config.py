from .dynaconf_settings import AppConfig, GetSettings, LaunchEvent
from .errors import ConfigurationError

__all__ = ["AppConfig", "LaunchEvent", "LoadConfig"]


def LoadConfig() -> AppConfig:
    """Load configuration using dynaconf.

    Returns:
        AppConfig: Instance with loaded values from settings files and environment.

    Raises:
        ConfigurationError: If a required setting is missing or unreadable.

    Example:
        config = LoadConfig()
        print(config.database_url)
    """
    try:
        return GetSettings()
    except ConfigurationError:
        raise
    except Exception as e:
        raise ConfigurationError(f"Failed to load configuration: {e}") from e
