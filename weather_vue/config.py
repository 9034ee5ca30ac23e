# ABOUTME: Startup configuration for the weather fetch layer, read from the environment.
# ABOUTME: Loads a .env file via python-dotenv; units and language are fixed to metric and English.

import os
from enum import Enum

from dotenv import load_dotenv
from pydantic import BaseModel

from weather_vue.errors import ConfigurationError

load_dotenv()

UNITS = "metric"
LANGUAGE = "en"


class Provider(str, Enum):
    """Upstream weather provider; each one produces a different payload shape."""

    OPEN_METEO = "open-meteo"
    OPENWEATHER = "openweather"


class Settings(BaseModel):
    """Endpoints, credentials, and defaults consumed by the fetch layer."""

    provider: Provider = Provider.OPEN_METEO
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    open_meteo_forecast_url: str = "https://api.open-meteo.com/v1/forecast"
    openweather_base_url: str = "https://api.openweathermap.org/data/2.5"
    openweather_api_key: str = ""
    default_city: str = "Paris"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables, falling back to the defaults."""
        overrides = {
            field: os.environ[env_name]
            for field, env_name in _ENV_VARS.items()
            if os.environ.get(env_name)
        }
        settings = cls(**overrides)
        if settings.provider is Provider.OPENWEATHER and not settings.openweather_api_key:
            raise ConfigurationError("OPENWEATHER_API_KEY is required when WEATHER_PROVIDER is openweather.")
        return settings


_ENV_VARS: dict[str, str] = {
    "provider": "WEATHER_PROVIDER",
    "geocoding_url": "GEOCODING_URL",
    "open_meteo_forecast_url": "OPEN_METEO_FORECAST_URL",
    "openweather_base_url": "OPENWEATHER_BASE_URL",
    "openweather_api_key": "OPENWEATHER_API_KEY",
    "default_city": "DEFAULT_CITY",
}
