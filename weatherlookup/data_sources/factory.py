"""Factory helpers for choosing a weather data source at startup."""

from __future__ import annotations

from weatherlookup import config
from weatherlookup.data_sources.base import CallableWeatherDataSource, WeatherDataSource
from weatherlookup.data_sources.open_meteo_client import fetch_forecast, search_places
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="data_sources/factory")


DEFAULT_SOURCE_NAME = "open_meteo"


def build_data_source(settings: config.Settings | None = None) -> WeatherDataSource:
    """Instantiate the configured weather data source."""
    settings = settings or config.settings
    source = (settings.weather_source or DEFAULT_SOURCE_NAME).lower()

    if source == "open_meteo":
        logger.info(
            "Using Open-Meteo data source",
            extra={"geocoding_url": settings.geocoding_url, "forecast_url": settings.forecast_url},
        )
        return CallableWeatherDataSource(places=search_places, forecast=fetch_forecast)

    raise ValueError(f"Unknown weather source '{source}'")
