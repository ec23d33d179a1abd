"""Client configuration using pydantic-settings.

Settings come from keyword arguments, environment variables prefixed with
``APPIUM_VISION_`` and an optional ``.env`` file.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Main configuration settings for the client."""

    # Transport settings
    server_url: str = Field(
        "http://127.0.0.1:4723", description="Base URL of the remote automation server"
    )
    request_timeout: float = Field(60.0, gt=0, description="HTTP timeout for a single call")

    # Wait settings
    wait_timeout: float = Field(30.0, description="Default wait deadline in seconds")
    wait_interval: float = Field(0.2, description="Default delay between polling attempts")

    # Image element settings
    staleness_tolerance: float = Field(
        3.0, ge=0.0, description="Pixels a re-found match may move before it counts as stale"
    )

    # Logging settings
    log_level: str = Field("INFO", description="Log level for setup_logging")
    structured_logs: bool = Field(False, description="Render logs as JSON")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="APPIUM_VISION_",
        case_sensitive=False,
        extra="ignore",
    )


# Singleton instance
_settings: ClientSettings | None = None


def get_settings() -> ClientSettings:
    """Get the singleton settings instance.

    Returns:
        ClientSettings instance
    """
    global _settings

    if _settings is None:
        _settings = ClientSettings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None
