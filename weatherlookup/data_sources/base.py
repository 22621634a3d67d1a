"""Interfaces and helpers for place and forecast data sources."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Protocol

from weatherlookup.data_sources.open_meteo_client import ForecastBundle, PlaceCandidate


class WeatherDataSource(Protocol):
    """Interface for anything that can geocode place names and fetch forecasts."""

    def search_places(
        self,
        query: str,
        *,
        count: int = 5,
        language: str = "en",
        timeout: float = 10.0,
    ) -> List[PlaceCandidate]:
        """Return up to `count` candidates in relevance order (possibly none)."""
        ...

    def fetch_forecast(
        self,
        latitude: float,
        longitude: float,
        *,
        include_hourly_humidity: bool = True,
        timeout: float = 10.0,
    ) -> ForecastBundle:
        """Return current conditions and daily aggregates for a location."""
        ...


@dataclass
class CallableWeatherDataSource(WeatherDataSource):
    """Wrap two callables so backends (or test fakes) can be swapped in."""

    places: Callable[..., List[PlaceCandidate]]
    forecast: Callable[..., ForecastBundle]

    def search_places(self, *args, **kwargs) -> List[PlaceCandidate]:
        return self.places(*args, **kwargs)

    def fetch_forecast(self, *args, **kwargs) -> ForecastBundle:
        return self.forecast(*args, **kwargs)
