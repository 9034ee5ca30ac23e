# ABOUTME: Sample extraction from provider payloads into uniform WeatherSample sequences.
# ABOUTME: Dispatches on payload shape (columnar Open-Meteo arrays or discrete OpenWeatherMap records).

import logging
import math
from collections.abc import Callable, Mapping
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from weather_vue.conditions import UNKNOWN_CONDITION
from weather_vue.models import CurrentConditions, WeatherSample

logger = logging.getLogger(__name__)

MS_TO_KMH = 3.6


class PayloadShape(str, Enum):
    """How a provider lays out its time series."""

    COLUMNAR = "columnar"
    DISCRETE = "discrete"


# Candidate Open-Meteo column names per sample field, first match wins.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "temperature": ("temperature_2m", "temperature"),
    "temperature_min": ("temperature_2m_min",),
    "temperature_max": ("temperature_2m_max",),
    "condition_code": ("weathercode", "weather_code"),
    "apparent_temperature": ("apparent_temperature",),
    "humidity_percent": ("relativehumidity_2m", "relative_humidity_2m"),
    "pressure_hpa": ("pressure_msl",),
    "wind_speed_kmh": ("windspeed_10m", "wind_speed_10m"),
}

# OpenWeatherMap condition ids translated into the WMO code space.
# Atmosphere ids (mist, smoke, haze, dust, fog, sand, ash) become fog (45);
# squalls and tornadoes have no WMO counterpart and become thunderstorm (95).
OPENWEATHER_TO_WMO: dict[int, int] = {
    200: 95, 201: 95, 202: 99, 210: 95, 211: 95, 212: 99, 221: 95, 230: 95, 231: 95, 232: 99,
    300: 51, 301: 53, 302: 55, 310: 51, 311: 53, 312: 55, 313: 81, 314: 82, 321: 81,
    500: 61, 501: 63, 502: 65, 503: 65, 504: 65, 511: 66,
    520: 80, 521: 81, 522: 82, 531: 81,
    600: 71, 601: 73, 602: 75, 611: 66, 612: 66, 613: 67, 615: 61, 616: 63,
    620: 85, 621: 86, 622: 86,
    701: 45, 711: 45, 721: 45, 731: 45, 741: 45, 751: 45, 761: 45, 762: 45,
    771: 95, 781: 95,
    800: 0, 801: 1, 802: 2, 803: 3, 804: 3,
}


def extract_samples(raw: Any, shape: PayloadShape | str, utc_offset_seconds: int = 0) -> list[WeatherSample]:
    """Turn a provider payload into an ordered list of WeatherSample records.

    Never raises: malformed or missing fields degrade to absent values or an
    empty list so that callers can still render whatever else they have.

    Args:
        raw: Columnar block (e.g. Open-Meteo ``daily``) or discrete records
            (OpenWeatherMap ``list``, or the dict holding it).
        shape: Which layout ``raw`` uses.
        utc_offset_seconds: Offset that naive timestamps are expressed in.
    """
    try:
        extractor = _EXTRACTORS[PayloadShape(shape)]
    except ValueError:
        logger.warning("Unknown payload shape %r, returning no samples", shape)
        return []
    return extractor(raw, utc_offset_seconds)


def extract_current(raw: Any, shape: PayloadShape | str) -> CurrentConditions | None:
    """Pull the current-conditions snapshot out of a provider payload, or None if unusable."""
    if not isinstance(raw, Mapping):
        return None
    try:
        shape = PayloadShape(shape)
    except ValueError:
        logger.warning("Unknown payload shape %r, no current conditions", shape)
        return None
    if shape is PayloadShape.COLUMNAR:
        return _current_from_columnar(raw)
    return _current_from_record(raw)


def extract_utc_offset(raw: Any) -> int | None:
    """Read the location's UTC offset in seconds from a provider payload, if it carries one."""
    if not isinstance(raw, Mapping):
        return None
    for candidate in (raw.get("utc_offset_seconds"), _mapping(raw.get("city")).get("timezone"), raw.get("timezone")):
        offset = _as_int(candidate)
        if offset is not None:
            return offset
    return None


def parse_timestamp(value: Any, utc_offset_seconds: int = 0) -> datetime | None:
    """Parse an ISO string or unix seconds into an aware UTC datetime.

    Naive ISO strings are read as wall-clock time at ``utc_offset_seconds``.
    Returns None for anything that cannot be parsed.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=_fixed_offset(utc_offset_seconds))
    try:
        return parsed.astimezone(timezone.utc)
    except (OverflowError, ValueError):
        return None


def openweather_to_wmo(code: Any) -> int:
    """Translate an OpenWeatherMap condition id into a WMO weather code."""
    value = _as_int(code)
    if value is None:
        return UNKNOWN_CONDITION
    return OPENWEATHER_TO_WMO.get(value, UNKNOWN_CONDITION)


def _extract_columnar(raw: Any, utc_offset_seconds: int) -> list[WeatherSample]:
    """Zip Open-Meteo parallel arrays into row-oriented samples."""
    if not isinstance(raw, Mapping):
        return []
    times = raw.get("time")
    if not isinstance(times, (list, tuple)):
        return []

    result = []
    for i, t in enumerate(times):
        timestamp = parse_timestamp(t, utc_offset_seconds)
        if timestamp is None:
            logger.debug("Skipping column index %d with unparseable time %r", i, t)
            continue
        temperature_min = _as_float(_column_value(raw, "temperature_min", i))
        temperature_max = _as_float(_column_value(raw, "temperature_max", i))
        temperature = _first_present(
            _as_float(_column_value(raw, "temperature", i)), temperature_max, temperature_min
        )
        if temperature is None:
            logger.debug("Skipping column index %d with no temperature", i)
            continue
        result.append(
            WeatherSample(
                timestamp_utc=timestamp,
                temperature=temperature,
                temperature_min=temperature_min,
                temperature_max=temperature_max,
                condition_code=_as_code(_column_value(raw, "condition_code", i)),
                apparent_temperature=_as_float(_column_value(raw, "apparent_temperature", i)),
                humidity_percent=_as_float(_column_value(raw, "humidity_percent", i)),
                pressure_hpa=_as_float(_column_value(raw, "pressure_hpa", i)),
                wind_speed_kmh=_as_float(_column_value(raw, "wind_speed_kmh", i)),
            )
        )
    return result


def _extract_discrete(raw: Any, utc_offset_seconds: int) -> list[WeatherSample]:
    """Map OpenWeatherMap per-instant records into samples.

    Record timestamps are absolute (``dt`` unix seconds, ``dt_txt`` in UTC), so
    the offset is not needed here.
    """
    records = raw.get("list") if isinstance(raw, Mapping) else raw
    if not isinstance(records, (list, tuple)):
        return []

    result = []
    for record in records:
        sample = _sample_from_record(record)
        if sample is not None:
            result.append(sample)
    return result


_EXTRACTORS: dict[PayloadShape, Callable[[Any, int], list[WeatherSample]]] = {
    PayloadShape.COLUMNAR: _extract_columnar,
    PayloadShape.DISCRETE: _extract_discrete,
}


def _sample_from_record(record: Any) -> WeatherSample | None:
    if not isinstance(record, Mapping):
        logger.debug("Skipping non-object forecast record %r", record)
        return None
    timestamp = parse_timestamp(record.get("dt"))
    if timestamp is None:
        timestamp = parse_timestamp(record.get("dt_txt"))
    main = _mapping(record.get("main"))
    temperature = _as_float(main.get("temp"))
    if timestamp is None or temperature is None:
        logger.debug("Skipping forecast record without time or temperature")
        return None

    wind_speed = _as_float(_mapping(record.get("wind")).get("speed"))
    return WeatherSample(
        timestamp_utc=timestamp,
        temperature=temperature,
        temperature_min=_as_float(main.get("temp_min")),
        temperature_max=_as_float(main.get("temp_max")),
        condition_code=openweather_to_wmo(_first_weather_id(record)),
        apparent_temperature=_as_float(main.get("feels_like")),
        humidity_percent=_as_float(main.get("humidity")),
        pressure_hpa=_as_float(main.get("pressure")),
        wind_speed_kmh=None if wind_speed is None else wind_speed * MS_TO_KMH,
    )


def _current_from_columnar(raw: Mapping) -> CurrentConditions | None:
    """Join Open-Meteo ``current_weather`` with the hourly arrays at the same timestamp."""
    current = _mapping(raw.get("current_weather"))
    observed_at = parse_timestamp(current.get("time"), _as_int(raw.get("utc_offset_seconds")) or 0)
    temperature = _as_float(current.get("temperature"))
    if observed_at is None or temperature is None:
        return None

    hourly = _mapping(raw.get("hourly"))
    times = hourly.get("time")
    index = times.index(current["time"]) if isinstance(times, list) and current["time"] in times else -1

    def hourly_value(field: str) -> float | None:
        if index < 0:
            return None
        return _as_float(_column_value(hourly, field, index))

    return CurrentConditions(
        observed_at=observed_at,
        temperature=temperature,
        condition_code=_as_code(_first_present(current.get("weathercode"), current.get("weather_code"))),
        wind_speed_kmh=_as_float(_first_present(current.get("windspeed"), current.get("wind_speed"))),
        apparent_temperature=hourly_value("apparent_temperature"),
        humidity_percent=hourly_value("humidity_percent"),
        pressure_hpa=hourly_value("pressure_hpa"),
    )


def _current_from_record(raw: Mapping) -> CurrentConditions | None:
    sample = _sample_from_record(raw)
    if sample is None:
        return None
    return CurrentConditions(
        observed_at=sample.timestamp_utc,
        temperature=sample.temperature,
        condition_code=sample.condition_code,
        wind_speed_kmh=sample.wind_speed_kmh,
        apparent_temperature=sample.apparent_temperature,
        humidity_percent=sample.humidity_percent,
        pressure_hpa=sample.pressure_hpa,
    )


def _get_at(data: Mapping, key: str, index: int):
    """Safely get value at index from a column array, returning None if missing."""
    col = data.get(key)
    if not isinstance(col, (list, tuple)) or index >= len(col):
        return None
    return col[index]


def _column_value(data: Mapping, field: str, index: int):
    for key in COLUMN_ALIASES[field]:
        value = _get_at(data, key, index)
        if value is not None:
            return value
    return None


def _first_weather_id(record: Mapping):
    weather = record.get("weather")
    if isinstance(weather, list) and weather and isinstance(weather[0], Mapping):
        return weather[0].get("id")
    return None


def _mapping(value: Any) -> Mapping:
    return value if isinstance(value, Mapping) else {}


def _first_present(*values):
    return next((v for v in values if v is not None), None)


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        result = float(value)
    except OverflowError:
        return None
    return result if math.isfinite(result) else None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _as_code(value: Any) -> int:
    code = _as_int(value)
    return UNKNOWN_CONDITION if code is None else code


def _fixed_offset(seconds: int) -> timezone:
    try:
        return timezone(timedelta(seconds=seconds))
    except (TypeError, ValueError):
        return timezone.utc
