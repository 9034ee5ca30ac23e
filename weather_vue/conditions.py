# ABOUTME: Canonical WMO weather code table mapping each code to an emoji and description.
# ABOUTME: describe_condition is total: unmapped or malformed codes fall back to a cloudy entry.

from weather_vue.models import ConditionInfo

# Sentinel for samples whose provider did not report a condition.
UNKNOWN_CONDITION = -1

# WMO Weather Interpretation Codes (https://open-meteo.com/en/docs)
WMO_CONDITIONS: dict[int, tuple[str, str]] = {
    0: ("☀️", "Clear sky"),
    1: ("⛅", "Mainly clear"),
    2: ("⛅", "Partly cloudy"),
    3: ("⛅", "Overcast"),
    45: ("🌫️", "Fog"),
    48: ("🌫️", "Depositing rime fog"),
    51: ("🌦️", "Light drizzle"),
    53: ("🌦️", "Moderate drizzle"),
    55: ("🌦️", "Dense drizzle"),
    56: ("🌦️", "Light freezing drizzle"),
    57: ("🌦️", "Dense freezing drizzle"),
    61: ("🌧️", "Slight rain"),
    63: ("🌧️", "Moderate rain"),
    65: ("🌧️", "Heavy rain"),
    66: ("🌧️", "Light freezing rain"),
    67: ("🌧️", "Heavy freezing rain"),
    71: ("❄️", "Slight snowfall"),
    73: ("❄️", "Moderate snowfall"),
    75: ("❄️", "Heavy snowfall"),
    77: ("❄️", "Snow grains"),
    80: ("🌧️", "Slight rain showers"),
    81: ("🌧️", "Moderate rain showers"),
    82: ("🌧️", "Violent rain showers"),
    85: ("❄️", "Slight snow showers"),
    86: ("❄️", "Heavy snow showers"),
    95: ("⛈️", "Thunderstorm"),
    96: ("⛈️", "Thunderstorm with light hail"),
    99: ("⛈️", "Thunderstorm with heavy hail"),
}

FALLBACK_CONDITION = ConditionInfo(emoji="☁️", description="Unknown conditions")


def describe_condition(code: int | None) -> ConditionInfo:
    """Convert a WMO weather code to its emoji and description, never failing."""
    entry = WMO_CONDITIONS.get(code) if isinstance(code, int) else None
    if entry is None:
        return FALLBACK_CONDITION
    emoji, description = entry
    return ConditionInfo(emoji=emoji, description=description)
