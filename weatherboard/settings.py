from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class ProxySettings(BaseSettings):
    """
    Server-side configuration for the weather proxy.

    Loaded from:
    - environment variables
    - .env file (if present)

    The API key only ever lives here; it is injected into upstream
    requests and never returned to callers.
    """
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # Required key (the proxy fails on first use if missing)
    api_key: str

    app_name: str = "Weatherboard"
    openweather_base: str = "https://api.openweathermap.org"
    units: str = "metric"
    log_level: str = "INFO"


class ClientSettings(BaseSettings):
    """Client-side configuration (env prefix WEATHERBOARD_)."""
    model_config = SettingsConfigDict(env_file=".env", env_prefix="WEATHERBOARD_", extra="ignore")

    proxy_url: str = "http://127.0.0.1:8000"
    default_city: str = "Port Elizabeth"

    # How long success/error messages stay visible
    message_seconds: float = 3.0
    log_level: str = "INFO"


@lru_cache
def get_proxy_settings() -> ProxySettings:
    return ProxySettings()


@lru_cache
def get_client_settings() -> ClientSettings:
    return ClientSettings()
