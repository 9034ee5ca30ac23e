# ABOUTME: Shared test fixtures for the weather-vue test suite.
# ABOUTME: Provides default settings so tests never depend on the developer's environment.

import pytest

from weather_vue.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Default Open-Meteo settings, independent of any .env file."""
    return Settings()


@pytest.fixture
def openweather_settings() -> Settings:
    """Settings that route searches through OpenWeatherMap."""
    return Settings(provider="openweather", openweather_api_key="test-key")
