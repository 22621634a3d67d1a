"""Fetch forecasts for a location and merge them with the resolved place."""
from __future__ import annotations

from typing import List, Tuple

from weatherlookup import config
from weatherlookup.data_sources import ForecastBundle, PlaceCandidate, WeatherDataSource
from weatherlookup.domain import CurrentConditions, DailyForecast
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="forecast_service")


class ForecastFetcher:
    """Retrieve current conditions and daily aggregates for coordinates."""

    def __init__(self, source: WeatherDataSource, settings: config.Settings | None = None) -> None:
        settings = settings or config.settings
        self.source = source
        self.include_hourly_humidity = settings.include_hourly_humidity
        self.timeout = settings.request_timeout_seconds

    def fetch(self, latitude: float, longitude: float) -> ForecastBundle:
        """One forecast request; UpstreamError propagates from the data source."""
        logger.debug("Fetching forecast", extra={"latitude": latitude, "longitude": longitude})
        bundle = self.source.fetch_forecast(
            latitude,
            longitude,
            include_hourly_humidity=self.include_hourly_humidity,
            timeout=self.timeout,
        )
        if bundle.current.humidity_percent is None and self.include_hourly_humidity:
            logger.debug("No hourly humidity for observation time", extra={"observed_at": bundle.current.observed_at})
        return bundle


def assemble_conditions(place: PlaceCandidate, bundle: ForecastBundle) -> Tuple[CurrentConditions, List[DailyForecast]]:
    """Merge a place and its forecast bundle into the display model."""
    current = CurrentConditions(
        place_label=place.label,
        temperature_celsius=bundle.current.temperature_celsius,
        wind_speed_kmh=bundle.current.wind_speed_kmh,
        weather_code=bundle.current.weather_code,
        observed_at=bundle.current.observed_at,
        humidity_percent=bundle.current.humidity_percent,
    )
    daily = [
        DailyForecast(
            date=day.date,
            max_temp_celsius=day.max_temp_celsius,
            min_temp_celsius=day.min_temp_celsius,
            weather_code=day.weather_code,
        )
        for day in bundle.daily
    ]
    return current, daily
