"""Payload builders and test doubles shared by the test modules."""
import requests

from weatherlookup.data_sources import PlaceCandidate, open_meteo_client
from weatherlookup.data_sources.open_meteo_client import parse_forecast


class DummyResp:
    def __init__(self, payload, status_code=200, json_error=None):
        self._payload = payload
        self.status_code = status_code
        self._json_error = json_error

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._json_error is not None:
            raise self._json_error
        return self._payload


class RecordingSession:
    """Stands in for requests.Session; remembers every GET."""

    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": dict(params or {}), "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


PARIS = PlaceCandidate(id=2988507, name="Paris", country="France", latitude=48.85341, longitude=2.3488, admin1="Île-de-France")
PARIS_TX = PlaceCandidate(id=4717560, name="Paris", country="United States", latitude=33.66094, longitude=-95.55551, admin1="Texas")
PARIS_TN = PlaceCandidate(id=4647963, name="Paris", country="United States", latitude=36.302, longitude=-88.32671, admin1="Tennessee")
TOKYO = PlaceCandidate(id=1850147, name="Tokyo", country="Japan", latitude=35.6895, longitude=139.69171, admin1="Tokyo")


def geocoding_payload(*candidates):
    return {
        "results": [
            {
                "id": c.id,
                "name": c.name,
                "country": c.country,
                "admin1": c.admin1,
                "latitude": c.latitude,
                "longitude": c.longitude,
                "timezone": "Europe/Paris",
            }
            for c in candidates
        ],
        "generationtime_ms": 0.5,
    }


def forecast_payload(temperature=12.3, weathercode=3, time="2024-05-01T14:00", with_hourly=True):
    payload = {
        "latitude": 48.86,
        "longitude": 2.34,
        "timezone": "Europe/Paris",
        "current_weather": {
            "temperature": temperature,
            "windspeed": 9.4,
            "winddirection": 250,
            "weathercode": weathercode,
            "time": time,
        },
        "daily": {
            "time": ["2024-05-01", "2024-05-02", "2024-05-03"],
            "temperature_2m_max": [17.2, 19.5, 15.0],
            "temperature_2m_min": [8.1, 9.9, 7.4],
            "weathercode": [3, 61, 0],
        },
    }
    if with_hourly:
        payload["hourly"] = {
            "time": ["2024-05-01T13:00", "2024-05-01T14:00", "2024-05-01T15:00"],
            "relativehumidity_2m": [70, 64, 60],
        }
    return payload


class FakeSource:
    """Data source whose answers are keyed by query / latitude.

    `gates` maps a query or latitude to a threading.Event the call waits on
    before answering, to control the order in which responses arrive.
    """

    def __init__(self, places=None, forecasts=None):
        self.places = places or {}
        self.forecasts = forecasts or {}
        self.gates = {}
        self.place_calls = []
        self.forecast_calls = []

    def _wait(self, key):
        gate = self.gates.get(key)
        if gate is not None:
            gate.wait(5)

    def search_places(self, query, **kwargs):
        self.place_calls.append((query, kwargs))
        self._wait(query)
        answer = self.places.get(query, [])
        if isinstance(answer, Exception):
            raise answer
        return list(answer)

    def fetch_forecast(self, latitude, longitude, **kwargs):
        self.forecast_calls.append((latitude, longitude))
        self._wait(latitude)
        answer = self.forecasts.get(latitude)
        if answer is None:
            answer = parse_forecast(forecast_payload())
        if isinstance(answer, Exception):
            raise answer
        return answer


class RoutingSession:
    """requests.Session stand-in answering geocoding and forecast URLs separately."""

    def __init__(self, geocoding, forecast):
        self.geocoding = geocoding
        self.forecast = forecast

    def get(self, url, params=None, timeout=None):
        if url == open_meteo_client.OPEN_METEO_GEOCODING_URL:
            return DummyResp(self.geocoding)
        return DummyResp(self.forecast)
