# ABOUTME: Search workflow from a free-text city query to a complete WeatherReport.
# ABOUTME: Validates input, geocodes, fetches per provider, then extracts and aggregates by local day.

import asyncio
import logging

import httpx

from weather_vue.aggregate import aggregate_by_local_day
from weather_vue.config import Provider, Settings
from weather_vue.errors import InvalidQueryError
from weather_vue.extract import PayloadShape, extract_current, extract_samples, extract_utc_offset
from weather_vue.models import Location, WeatherReport
from weather_vue.weather_service import (
    geocode,
    get_open_meteo_forecast,
    get_openweather_current,
    get_openweather_forecast,
)

logger = logging.getLogger(__name__)

EMPTY_QUERY_MESSAGE = "Please enter a valid city name before searching."


async def load_weather(client: httpx.AsyncClient, query: str, settings: Settings) -> WeatherReport:
    """Resolve ``query`` to a location and build its current conditions and daily forecast.

    Raises:
        InvalidQueryError: The query is blank; no request is made.
        LocationNotFoundError: Geocoding found nothing.
        UpstreamError: A provider call failed.
    """
    trimmed = (query or "").strip()
    if not trimmed:
        raise InvalidQueryError(EMPTY_QUERY_MESSAGE)

    logger.info("Loading weather for %s", trimmed)
    location = await geocode(client, trimmed, settings)

    if settings.provider is Provider.OPENWEATHER:
        report = await _load_openweather(client, location, settings)
    else:
        report = await _load_open_meteo(client, location, settings)

    if not report.days:
        logger.info("No forecast days extracted for %s", location.name)
    return report


def status_message(report: WeatherReport) -> str:
    """Status line shown once a search has rendered."""
    return f"Weather updated for {report.location.name}, {report.location.country}."


async def _load_open_meteo(client: httpx.AsyncClient, location: Location, settings: Settings) -> WeatherReport:
    payload = await get_open_meteo_forecast(client, location, settings)
    location = _with_payload_offset(location, payload)
    offset = location.timezone_offset_seconds

    samples = extract_samples(payload.get("daily"), PayloadShape.COLUMNAR, offset)
    return WeatherReport(
        location=location,
        current=extract_current(payload, PayloadShape.COLUMNAR),
        days=aggregate_by_local_day(samples, offset),
    )


async def _load_openweather(client: httpx.AsyncClient, location: Location, settings: Settings) -> WeatherReport:
    # No ordering dependency between the two calls.
    current_payload, forecast_payload = await asyncio.gather(
        get_openweather_current(client, location, settings),
        get_openweather_forecast(client, location, settings),
    )
    location = _with_payload_offset(location, forecast_payload, current_payload)
    offset = location.timezone_offset_seconds

    samples = extract_samples(forecast_payload, PayloadShape.DISCRETE, offset)
    return WeatherReport(
        location=location,
        current=extract_current(current_payload, PayloadShape.DISCRETE),
        days=aggregate_by_local_day(samples, offset),
    )


def _with_payload_offset(location: Location, *payloads: dict) -> Location:
    """Prefer the provider-reported UTC offset over the one derived at geocoding time."""
    for payload in payloads:
        offset = extract_utc_offset(payload)
        if offset is not None:
            return location.model_copy(update={"timezone_offset_seconds": offset})
    return location


async def load_default_weather(client: httpx.AsyncClient, settings: Settings) -> WeatherReport:
    """Initial search that keeps the view populated on first load."""
    return await load_weather(client, settings.default_city, settings)
