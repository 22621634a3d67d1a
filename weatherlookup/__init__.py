"""Place-name weather lookups against the Open-Meteo geocoding and forecast APIs."""

__version__ = "0.1.0"
