# ABOUTME: Exceptions raised by the fetch and search layers, each carrying a user-facing message.
# ABOUTME: Extraction and aggregation never raise these; they degrade to empty results instead.


class WeatherError(Exception):
    """Base class for failures that are shown to the user as a plain message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidQueryError(WeatherError):
    """The search query was empty or blank."""


class LocationNotFoundError(WeatherError):
    """Geocoding returned no results for the query."""


class UpstreamError(WeatherError):
    """A provider returned a non-2xx response, malformed JSON, or could not be reached."""


class ConfigurationError(WeatherError):
    """Required startup configuration is missing."""
