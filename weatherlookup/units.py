"""Temperature unit preference applied when rendering."""
from __future__ import annotations

import math
from enum import Enum
from typing import Optional


class TemperatureUnit(str, Enum):
    CELSIUS = "celsius"
    FAHRENHEIT = "fahrenheit"

    @property
    def symbol(self) -> str:
        return "°C" if self is TemperatureUnit.CELSIUS else "°F"


def celsius_to_fahrenheit(temp_c: float) -> float:
    return temp_c * 9 / 5 + 32


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves towards +infinity (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


class UnitPreference:
    """Active display unit. Changing it never touches lookup state."""

    def __init__(self, unit: TemperatureUnit | str = TemperatureUnit.CELSIUS) -> None:
        self.unit = TemperatureUnit(unit)

    def __repr__(self) -> str:
        return f"UnitPreference(unit={self.unit.value!r})"

    def toggle(self) -> TemperatureUnit:
        """Flip between Celsius and Fahrenheit and return the new unit."""
        if self.unit is TemperatureUnit.CELSIUS:
            self.unit = TemperatureUnit.FAHRENHEIT
        else:
            self.unit = TemperatureUnit.CELSIUS
        return self.unit

    def convert(self, temp_c: float) -> float:
        if self.unit is TemperatureUnit.FAHRENHEIT:
            return celsius_to_fahrenheit(temp_c)
        return temp_c

    def format(self, temp_c: float) -> str:
        """Whole-degree temperature with unit symbol, e.g. "32°F"."""
        return f"{round_half_up(self.convert(temp_c))}{self.unit.symbol}"

    def format_range(self, max_c: Optional[float], min_c: Optional[float]) -> str:
        """Daily high/low without unit symbols, e.g. "25° / 14°"; missing values show as "-"."""
        def _deg(value: Optional[float]) -> str:
            return "-" if value is None else f"{round_half_up(self.convert(value))}°"

        return f"{_deg(max_c)} / {_deg(min_c)}"
