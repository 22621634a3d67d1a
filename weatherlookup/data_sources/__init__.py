"""Data sources for geocoding and forecast lookups."""

from .base import CallableWeatherDataSource, WeatherDataSource
from .factory import build_data_source
from .open_meteo_client import (
    CurrentWeather,
    DailyForecastEntry,
    ForecastBundle,
    PlaceCandidate,
    fetch_forecast,
    search_places,
)

__all__ = [
    "build_data_source",
    "WeatherDataSource",
    "CallableWeatherDataSource",
    "CurrentWeather",
    "DailyForecastEntry",
    "ForecastBundle",
    "PlaceCandidate",
    "fetch_forecast",
    "search_places",
]
