# ABOUTME: Plain-text rendering of a WeatherReport: current conditions card and forecast cards.
# ABOUTME: Owns the display window (five days), the "Today" heading, and the no-data placeholder.

from collections.abc import Sequence
from datetime import datetime

from weather_vue.conditions import describe_condition
from weather_vue.formatting import capitalize_first_letter, day_label, format_relative_time, round_half_up
from weather_vue.models import CurrentConditions, DaySummary, Location, WeatherReport

DISPLAY_DAYS = 5
MISSING = "—"
NO_FORECAST_MESSAGE = "No forecast data is currently available."


def _metric(value: float | None, unit: str) -> str:
    if value is None:
        return MISSING
    return f"{round_half_up(value)}{unit}"


def render_current(location: Location, current: CurrentConditions | None, now: datetime) -> list[str]:
    """Lines for the current-conditions card."""
    lines = [f"{location.name}, {location.country}"]
    if current is None:
        lines.append(MISSING)
        return lines

    condition = describe_condition(current.condition_code)
    lines += [
        f"Updated {format_relative_time(current.observed_at, now)}",
        f"{condition.emoji} {_metric(current.temperature, '°C')} {condition.description}",
        f"Feels like {_metric(current.apparent_temperature, '°C')}",
        f"Wind {_metric(current.wind_speed_kmh, ' km/h')}",
        f"Humidity {_metric(current.humidity_percent, '%')}",
        f"Pressure {_metric(current.pressure_hpa, ' hPa')}",
    ]
    return lines


def render_forecast(days: Sequence[DaySummary], limit: int = DISPLAY_DAYS) -> list[str]:
    """One line per forecast card, or the placeholder when there is nothing to show."""
    shown = list(days)[:limit]
    if not shown:
        return [NO_FORECAST_MESSAGE]

    return [
        f"{capitalize_first_letter(day_label(i, day.local_date))}: {day.representative_emoji} "
        f"High {round_half_up(day.max_temperature)}°C • Low {round_half_up(day.min_temperature)}°C "
        f"{day.representative_description}"
        for i, day in enumerate(shown)
    ]


def render_report(report: WeatherReport, now: datetime, limit: int = DISPLAY_DAYS) -> str:
    """Full text view of one search result."""
    lines = render_current(report.location, report.current, now)
    lines.append("")
    lines += render_forecast(report.days, limit)
    return "\n".join(lines)
