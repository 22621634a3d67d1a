"""Error taxonomy for weather lookups.

Every lookup failure is one of EmptyQuery, NotFound or UpstreamError. All of
them end the current request only; the orchestrator turns them into a Failed
session and keeps accepting new queries.
"""


class WeatherLookupError(Exception):
    """Base class for lookup failures; `str(err)` is safe to show to users."""

    default_message = "Failed to fetch weather"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return str(self)


class EmptyQuery(WeatherLookupError):
    """The trimmed query was empty; no request was issued."""

    default_message = "Please enter a place name"


class NotFound(WeatherLookupError):
    """The geocoding service returned no candidates."""

    default_message = "City not found"


class UpstreamError(WeatherLookupError):
    """Transport failure or malformed response from either service."""


class InvalidTransition(RuntimeError):
    """An orchestrator operation was called in a state that does not allow it."""
