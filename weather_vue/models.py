# ABOUTME: Pydantic BaseModels for locations, weather samples, and day summaries.
# ABOUTME: Defines the provider-independent types shared by extraction, aggregation, and rendering.

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, model_validator


class Location(BaseModel):
    """Geocoded location with coordinates and its UTC offset."""

    model_config = ConfigDict(frozen=True)

    name: str
    country: str = ""
    latitude: float
    longitude: float
    timezone_offset_seconds: int = 0
    timezone: str = "auto"


class ConditionInfo(BaseModel):
    """Emoji and English description for a weather condition code."""

    model_config = ConfigDict(frozen=True)

    emoji: str
    description: str


class WeatherSample(BaseModel):
    """One provider-reported observation or forecast point at a single instant."""

    model_config = ConfigDict(frozen=True)

    timestamp_utc: datetime
    temperature: float
    condition_code: int
    temperature_min: float | None = None
    temperature_max: float | None = None
    apparent_temperature: float | None = None
    humidity_percent: float | None = None
    pressure_hpa: float | None = None
    wind_speed_kmh: float | None = None


class DaySummary(BaseModel):
    """Reduction of all samples that fall on one local calendar day."""

    model_config = ConfigDict(frozen=True)

    local_date: date
    min_temperature: float
    max_temperature: float
    representative_condition_code: int
    representative_description: str
    representative_emoji: str = ""

    @model_validator(mode="after")
    def _check_bounds(self) -> "DaySummary":
        if self.min_temperature > self.max_temperature:
            raise ValueError("min_temperature must not exceed max_temperature")
        return self


class CurrentConditions(BaseModel):
    """Current weather snapshot shown above the forecast."""

    model_config = ConfigDict(frozen=True)

    observed_at: datetime
    temperature: float
    condition_code: int
    wind_speed_kmh: float | None = None
    apparent_temperature: float | None = None
    humidity_percent: float | None = None
    pressure_hpa: float | None = None


class WeatherReport(BaseModel):
    """Everything one search produces: location, current conditions, and daily forecast."""

    model_config = ConfigDict(frozen=True)

    location: Location
    current: CurrentConditions | None = None
    days: list[DaySummary] = []
