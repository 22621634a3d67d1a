import unittest

from weatherlookup.data_sources.factory import build_data_source, DEFAULT_SOURCE_NAME
from weatherlookup.data_sources.base import CallableWeatherDataSource
from weatherlookup.data_sources.open_meteo_client import fetch_forecast, search_places


class DummySettings:
    def __init__(self, **kwargs):
        for k, v in kwargs.items():
            setattr(self, k, v)
        self.weather_source = getattr(self, "weather_source", DEFAULT_SOURCE_NAME)
        self.geocoding_url = "https://geo.example"
        self.forecast_url = "https://forecast.example"


class TestDataSourceFactory(unittest.TestCase):
    def test_build_open_meteo_default(self):
        ds = build_data_source(DummySettings())
        self.assertIsInstance(ds, CallableWeatherDataSource)
        self.assertIs(ds.places, search_places)
        self.assertIs(ds.forecast, fetch_forecast)

    def test_source_name_is_case_insensitive(self):
        ds = build_data_source(DummySettings(weather_source="Open_Meteo"))
        self.assertIsInstance(ds, CallableWeatherDataSource)

    def test_unknown_source_raises(self):
        with self.assertRaises(ValueError):
            build_data_source(DummySettings(weather_source="unknown-source"))

    def test_callable_source_delegates(self):
        ds = CallableWeatherDataSource(places=lambda q, **kw: [q, kw], forecast=lambda lat, lon, **kw: (lat, lon))
        self.assertEqual(ds.search_places("Oslo", count=3), ["Oslo", {"count": 3}])
        self.assertEqual(ds.fetch_forecast(1.0, 2.0), (1.0, 2.0))


if __name__ == "__main__":
    unittest.main()
