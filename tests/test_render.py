# ABOUTME: Contract tests for the plain-text rendering of weather reports.
# ABOUTME: Validates the five-day window, "Today" heading, placeholders, and metric formatting.

from datetime import date, datetime, timedelta, timezone

from weather_vue.models import CurrentConditions, DaySummary, Location, WeatherReport
from weather_vue.render import NO_FORECAST_MESSAGE, render_current, render_forecast, render_report

NOW = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)
PARIS = Location(name="Paris", country="France", latitude=48.85, longitude=2.35, timezone_offset_seconds=3600)


def _day(offset: int, low: float = 2.0, high: float = 10.0) -> DaySummary:
    return DaySummary(
        local_date=date(2024, 1, 1) + timedelta(days=offset),
        min_temperature=low,
        max_temperature=high,
        representative_condition_code=3,
        representative_description="Overcast",
        representative_emoji="⛅",
    )


class TestRenderForecast:
    def test_empty_forecast_shows_placeholder(self):
        """No days renders the no-data placeholder.

        Implementation: Renders an empty list.
        Passing implies: Rendering owns the empty-state decision.
        """
        assert render_forecast([]) == [NO_FORECAST_MESSAGE]

    def test_limits_to_five_days_with_today_first(self):
        """Seven days render as five cards headed "Today", then weekday names.

        Implementation: Renders a week starting Monday 2024-01-01.
        Passing implies: Truncation and the "Today" label happen after aggregation.
        """
        lines = render_forecast([_day(i) for i in range(7)])

        assert len(lines) == 5
        assert lines[0].startswith("Today:")
        assert lines[1].startswith("Tuesday:")
        assert lines[4].startswith("Friday:")

    def test_card_shows_rounded_high_and_low(self):
        """Each card shows rounded high and low temperatures and the description.

        Implementation: Renders a day with half-degree bounds.
        Passing implies: Temperatures round half-up.
        """
        (line,) = render_forecast([_day(0, low=-1.5, high=9.5)])
        assert "High 10°C • Low -1°C" in line
        assert line.endswith("Overcast")


class TestRenderCurrent:
    def test_current_card(self):
        """The current card lists location, freshness, temperature, and metrics.

        Implementation: Renders conditions observed five minutes ago.
        Passing implies: Every current-conditions metric is shown.
        """
        current = CurrentConditions(
            observed_at=NOW - timedelta(minutes=5),
            temperature=4.6,
            condition_code=0,
            wind_speed_kmh=11.2,
            apparent_temperature=1.4,
            humidity_percent=81,
            pressure_hpa=1012.6,
        )
        lines = render_current(PARIS, current, NOW)

        assert lines[0] == "Paris, France"
        assert lines[1] == "Updated 5 minutes ago"
        assert "5°C" in lines[2]
        assert "Clear sky" in lines[2]
        assert "Feels like 1°C" in lines
        assert "Wind 11 km/h" in lines
        assert "Humidity 81%" in lines
        assert "Pressure 1013 hPa" in lines

    def test_missing_metrics_render_as_dash(self):
        """Unreported metrics show a dash.

        Implementation: Renders conditions with only the required fields.
        Passing implies: Partial data still renders.
        """
        current = CurrentConditions(observed_at=NOW, temperature=4.0, condition_code=0)
        lines = render_current(PARIS, current, NOW)
        assert "Feels like —" in lines
        assert "Humidity —" in lines

    def test_no_current_conditions(self):
        """Missing current conditions still render the location heading.

        Implementation: Renders with current=None.
        Passing implies: The forecast can show without current data.
        """
        assert render_current(PARIS, None, NOW) == ["Paris, France", "—"]


class TestRenderReport:
    def test_combines_current_and_forecast(self):
        """A full report renders the current card followed by the forecast.

        Implementation: Renders a report with no current data and two days.
        Passing implies: Both sections appear in order.
        """
        text = render_report(WeatherReport(location=PARIS, days=[_day(0), _day(1)]), NOW)
        assert text.splitlines()[0] == "Paris, France"
        assert "Today:" in text
        assert "Tuesday:" in text
