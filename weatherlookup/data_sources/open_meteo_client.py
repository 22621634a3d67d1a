"""Helpers for resolving places and fetching forecasts from the Open-Meteo APIs."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional

import requests

from weatherlookup.config import settings
from weatherlookup.errors import UpstreamError
from utils.logging_utils import get_tagged_logger
logger = get_tagged_logger(__name__, tag="open_meteo_client")

try:
    import requests_cache
except ImportError:
    logger.warning("Failed to import requests_cache.  Proceeding without response caching.")
    requests_cache = None

OPEN_METEO_GEOCODING_URL = settings.geocoding_url
OPEN_METEO_FORECAST_URL = settings.forecast_url

DAILY_VARS = ["temperature_2m_max", "temperature_2m_min", "weathercode"]
HOURLY_HUMIDITY_VAR = "relativehumidity_2m"


def build_session(cache_seconds: int = 0) -> requests.Session:
    """Return an HTTP session, cached in memory for `cache_seconds` when enabled."""
    if requests_cache and cache_seconds > 0:
        logger.info("Using in-memory requests_cache", extra={"expire_after": cache_seconds})
        return requests_cache.CachedSession(backend="memory", expire_after=cache_seconds)
    return requests.Session()


session = build_session(settings.http_cache_seconds)


@dataclass(frozen=True)
class PlaceCandidate:
    """One geocoding match, in the service's own relevance order."""
    id: int
    name: str
    country: str
    latitude: float
    longitude: float
    admin1: Optional[str] = None  # region/state, only used to tell candidates apart

    @property
    def label(self) -> str:
        """Place label shown to users and stored in the recent-search list."""
        if not self.country:
            return self.name
        return f"{self.name}, {self.country}"

    @property
    def detailed_label(self) -> str:
        """Label including the region, for candidate lists."""
        parts = [self.name, self.admin1, self.country]
        return ", ".join(p for p in parts if p)


@dataclass(frozen=True)
class CurrentWeather:
    """Current conditions as reported by the forecast service (no place attached)."""
    temperature_celsius: float
    wind_speed_kmh: float
    weather_code: int
    observed_at: str  # local ISO-8601, exactly as returned upstream
    humidity_percent: Optional[float]


@dataclass(frozen=True)
class DailyForecastEntry:
    """Daily aggregate for one forecast day."""
    date: str  # ISO-8601 date
    max_temp_celsius: Optional[float]
    min_temp_celsius: Optional[float]
    weather_code: int


@dataclass(frozen=True)
class ForecastBundle:
    """Everything one forecast call returns, normalized."""
    current: CurrentWeather
    daily: List[DailyForecastEntry]
    hourly_humidity: Optional[Dict[str, Optional[float]]] = None


def _get_json(url: str, params: Mapping[str, Any], *, timeout: float, context: str) -> Dict[str, Any]:
    """GET `url` once and return the decoded JSON object, raising UpstreamError on any failure."""
    try:
        resp = session.get(url, params=params, timeout=timeout)
        resp.raise_for_status()
    except requests.Timeout as exc:
        logger.warning("Open-Meteo request timed out", extra={"context": context, "timeout": timeout})
        raise UpstreamError(f"The {context} service did not respond within {timeout:g}s") from exc
    except requests.RequestException as exc:
        logger.warning("Open-Meteo request failed", extra={"context": context, "error": str(exc)})
        raise UpstreamError(f"The {context} service request failed") from exc

    try:
        data = resp.json()
    except ValueError as exc:
        raise UpstreamError(f"The {context} service returned an invalid response") from exc
    if not isinstance(data, dict):
        raise UpstreamError(f"The {context} service returned an invalid response")
    return data


def _optional_float(value: Any) -> Optional[float]:
    """Convert a JSON number to float, keeping nulls as None."""
    return None if value is None else float(value)


def parse_candidates(data: Mapping[str, Any], *, limit: int) -> List[PlaceCandidate]:
    """Turn a geocoding payload into at most `limit` candidates.

    An absent or empty `results` list yields []; entries missing id, name or
    coordinates are malformed and raise UpstreamError.
    """
    results = data.get("results") or []
    if not isinstance(results, list):
        raise UpstreamError("The geocoding service returned an invalid response")

    candidates: List[PlaceCandidate] = []
    for item in results[:limit]:
        try:
            candidates.append(
                PlaceCandidate(
                    id=int(item["id"]),
                    name=str(item["name"]),
                    country=str(item.get("country") or ""),
                    latitude=float(item["latitude"]),
                    longitude=float(item["longitude"]),
                    admin1=item.get("admin1"),
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            logger.warning("Malformed geocoding result", extra={"result": item})
            raise UpstreamError("The geocoding service returned an incomplete place") from exc
    return candidates


def humidity_at(observed_at: str, hourly_humidity: Optional[Mapping[str, Optional[float]]]) -> Optional[float]:
    """Humidity for the exact `observed_at` timestamp, or None on a miss."""
    if not hourly_humidity:
        return None
    return hourly_humidity.get(observed_at)


def parse_hourly_humidity(hourly: Any) -> Optional[Dict[str, Optional[float]]]:
    """Map hourly timestamps to humidity; None when the section is absent or unusable.

    Humidity is optional, so a malformed hourly section degrades to a miss
    instead of failing the whole forecast.
    """
    if not isinstance(hourly, dict) or not hourly.get("time") or HOURLY_HUMIDITY_VAR not in hourly:
        return None
    times = hourly["time"]
    values = hourly[HOURLY_HUMIDITY_VAR]
    if not isinstance(times, list) or not isinstance(values, list):
        logger.warning("Ignoring malformed hourly humidity", extra={"reason": "not a list"})
        return None
    if len(times) != len(values):
        logger.warning(
            "Ignoring hourly humidity with mismatched lengths",
            extra={"times": len(times), "values": len(values)},
        )
        return None
    try:
        return {str(t): _optional_float(h) for t, h in zip(times, values)}
    except (TypeError, ValueError):
        logger.warning("Ignoring malformed hourly humidity", extra={"reason": "non-numeric value"})
        return None


def parse_forecast(data: Mapping[str, Any]) -> ForecastBundle:
    """Normalize a forecast payload into a ForecastBundle."""
    current = data.get("current_weather")
    daily = data.get("daily")
    if not isinstance(current, dict) or not isinstance(daily, dict):
        raise UpstreamError("The forecast service response is missing current or daily weather")

    try:
        times = list(daily["time"])
        maxes = list(daily["temperature_2m_max"])
        mins = list(daily["temperature_2m_min"])
        codes = list(daily["weathercode"])
        entries = [
            DailyForecastEntry(
                date=str(times[i]),
                max_temp_celsius=_optional_float(maxes[i]),
                min_temp_celsius=_optional_float(mins[i]),
                weather_code=int(codes[i]),
            )
            for i in range(len(times))
        ]
    except (KeyError, TypeError, ValueError, IndexError) as exc:
        raise UpstreamError("The forecast service returned incomplete daily data") from exc
    if not len(times) == len(maxes) == len(mins) == len(codes):
        raise UpstreamError("The forecast service returned incomplete daily data")

    hourly_humidity = parse_hourly_humidity(data.get("hourly"))

    try:
        observed_at = str(current["time"])
        current_weather = CurrentWeather(
            temperature_celsius=float(current["temperature"]),
            wind_speed_kmh=float(current["windspeed"]),
            weather_code=int(current["weathercode"]),
            observed_at=observed_at,
            humidity_percent=humidity_at(observed_at, hourly_humidity),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise UpstreamError("The forecast service returned incomplete current weather") from exc

    return ForecastBundle(
        current=current_weather,
        daily=sorted(entries, key=lambda e: e.date),
        hourly_humidity=hourly_humidity,
    )


def search_places(
    query: str,
    *,
    count: int = 5,
    language: str = "en",
    timeout: float = 10.0,
) -> List[PlaceCandidate]:
    """Search the geocoding API; returns up to `count` candidates, possibly none."""
    params = {
        "name": query,
        "count": count,
        "language": language,
        "format": "json",
    }
    data = _get_json(OPEN_METEO_GEOCODING_URL, params, timeout=timeout, context="geocoding")
    return parse_candidates(data, limit=count)


def fetch_forecast(
    latitude: float,
    longitude: float,
    *,
    include_hourly_humidity: bool = True,
    timeout: float = 10.0,
) -> ForecastBundle:
    """Fetch current weather and daily aggregates (plus hourly humidity) for a location."""
    params = {
        "latitude": latitude,
        "longitude": longitude,
        "current_weather": "true",
        "daily": ",".join(DAILY_VARS),
        "timezone": "auto",
        "windspeed_unit": "kmh",
    }
    if include_hourly_humidity:
        params["hourly"] = HOURLY_HUMIDITY_VAR

    data = _get_json(OPEN_METEO_FORECAST_URL, params, timeout=timeout, context="forecast")
    return parse_forecast(data)
