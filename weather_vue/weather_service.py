# ABOUTME: Service layer for geocoding and provider forecast calls over httpx.
# ABOUTME: Turns HTTP and JSON failures into user-facing UpstreamError messages.

import logging
from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import httpx
from pydantic import ValidationError

from weather_vue.config import LANGUAGE, UNITS, Settings
from weather_vue.errors import LocationNotFoundError, UpstreamError
from weather_vue.formatting import capitalize_first_letter
from weather_vue.models import Location

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "City not found. Check the spelling or try another location."
GENERIC_FAILURE_MESSAGE = "Something went wrong while loading the weather data."

HOURLY_PARAMS = "apparent_temperature,relativehumidity_2m,pressure_msl"
DAILY_PARAMS = "weathercode,temperature_2m_max,temperature_2m_min"


async def fetch_json(client: httpx.AsyncClient, url: str, params: dict) -> dict:
    """GET a JSON endpoint, raising UpstreamError with a readable message on any failure."""
    try:
        resp = await client.get(url, params=params)
    except httpx.HTTPStatusError as e:
        resp = e.response
    except httpx.HTTPError as e:
        logger.warning("Request to %s failed: %s", url, e)
        raise UpstreamError(GENERIC_FAILURE_MESSAGE) from e

    if not resp.is_success:
        raise UpstreamError(_error_message(resp))

    try:
        data = resp.json()
    except ValueError as e:
        logger.warning("Malformed JSON from %s", url)
        raise UpstreamError(GENERIC_FAILURE_MESSAGE) from e
    if not isinstance(data, dict):
        raise UpstreamError(GENERIC_FAILURE_MESSAGE)
    return data


async def geocode(client: httpx.AsyncClient, query: str, settings: Settings) -> Location:
    """Geocode a city name to coordinates using the Open-Meteo geocoding API."""
    data = await fetch_json(
        client,
        settings.geocoding_url,
        {"name": query, "count": 1, "language": LANGUAGE, "format": "json"},
    )

    results = data.get("results")
    if not results or not isinstance(results, list):
        raise LocationNotFoundError(NOT_FOUND_MESSAGE)

    r = results[0]
    try:
        tz_name = r.get("timezone") or "auto"
        return Location(
            name=r["name"],
            country=r.get("country") or r.get("country_code") or "",
            latitude=r["latitude"],
            longitude=r["longitude"],
            timezone=tz_name,
            timezone_offset_seconds=utc_offset_for(tz_name),
        )
    except (AttributeError, KeyError, ValidationError) as e:
        logger.warning("Malformed geocoding result for %r: %s", query, e)
        raise UpstreamError(GENERIC_FAILURE_MESSAGE) from e


async def get_open_meteo_forecast(client: httpx.AsyncClient, location: Location, settings: Settings) -> dict:
    """Fetch current conditions plus hourly and daily arrays from Open-Meteo."""
    return await fetch_json(
        client,
        settings.open_meteo_forecast_url,
        {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "timezone": location.timezone,
            "current_weather": "true",
            "hourly": HOURLY_PARAMS,
            "daily": DAILY_PARAMS,
        },
    )


async def get_openweather_current(client: httpx.AsyncClient, location: Location, settings: Settings) -> dict:
    """Fetch the OpenWeatherMap current-weather object for a location."""
    return await fetch_json(client, f"{settings.openweather_base_url}/weather", _openweather_params(location, settings))


async def get_openweather_forecast(client: httpx.AsyncClient, location: Location, settings: Settings) -> dict:
    """Fetch the OpenWeatherMap 5 day / 3 hour forecast for a location."""
    return await fetch_json(client, f"{settings.openweather_base_url}/forecast", _openweather_params(location, settings))


def utc_offset_for(tz_name: str, at: datetime | None = None) -> int:
    """UTC offset in seconds of an IANA zone at ``at`` (default: now), or 0 if the zone is unknown."""
    try:
        zone = ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        return 0
    offset = (at or datetime.now(timezone.utc)).astimezone(zone).utcoffset()
    return int(offset.total_seconds()) if offset is not None else 0


def _openweather_params(location: Location, settings: Settings) -> dict:
    return {
        "lat": location.latitude,
        "lon": location.longitude,
        "appid": settings.openweather_api_key,
        "units": UNITS,
        "lang": LANGUAGE,
    }


def _error_message(resp: httpx.Response) -> str:
    """Prefer the provider's own error text, e.g. Open-Meteo's ``reason``."""
    try:
        body = resp.json()
    except (ValueError, httpx.StreamError):
        # The retry transport closes the body of a response it gave up on.
        body = {}
    if not isinstance(body, dict):
        body = {}
    message = body.get("error") if isinstance(body.get("error"), str) else None
    message = message or body.get("reason") or body.get("message")
    if not message or not isinstance(message, str):
        return GENERIC_FAILURE_MESSAGE
    return capitalize_first_letter(message)
