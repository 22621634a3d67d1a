"""Display-ready schemas produced by a successful lookup.

These are what the rendering layer reads. Descriptions and icons are computed
from the weather code on access, so they cannot drift from it.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, computed_field

from weatherlookup.weathercodes import IconRef, describe, icon_for


class _FrozenModel(BaseModel):
    """Immutable model that rejects unknown fields."""

    model_config = ConfigDict(extra="forbid", frozen=True)


class CurrentConditions(_FrozenModel):
    """Current weather at a resolved place."""
    place_label: str
    temperature_celsius: float
    wind_speed_kmh: float
    weather_code: int
    observed_at: str
    humidity_percent: Optional[float] = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def description(self) -> str:
        return describe(self.weather_code)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def icon(self) -> IconRef:
        return icon_for(self.weather_code)


class DailyForecast(_FrozenModel):
    """One day of the multi-day forecast."""
    date: str
    max_temp_celsius: Optional[float] = None
    min_temp_celsius: Optional[float] = None
    weather_code: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def description(self) -> str:
        return describe(self.weather_code)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def icon(self) -> IconRef:
        return icon_for(self.weather_code)
