"""WMO weather code classification and icon selection.

`classify` and `icon_for` both read `_CODE_CATEGORIES`, so a code can never be
classified as rain while showing a non-rain icon.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict


class WeatherCategory(str, Enum):
    """Coarse weather category for a WMO code."""
    CLEAR = "clear"
    PARTLY_CLOUDY = "partly_cloudy"
    OVERCAST = "overcast"
    FOG = "fog"
    RAIN = "rain"
    SNOW = "snow"
    THUNDERSTORM = "thunderstorm"
    UNKNOWN = "unknown"


class IconRef(str, Enum):
    """Reference to a display icon; the renderer decides what it looks like."""
    SUN = "sun"
    PARTLY_CLOUDY_DAY = "partly-cloudy-day"
    CLOUD = "cloud"
    FOG_DAY = "fog-day"
    RAIN = "rain"
    SNOW = "snow"
    STORM = "storm"
    THERMOMETER = "thermometer"


_CATEGORY_CODES: Dict[WeatherCategory, tuple[int, ...]] = {
    WeatherCategory.CLEAR: (0,),
    WeatherCategory.PARTLY_CLOUDY: (1, 2),
    WeatherCategory.OVERCAST: (3,),
    WeatherCategory.FOG: (45, 48),
    WeatherCategory.RAIN: (51, 53, 55, 61, 63, 65, 80, 81, 82),
    WeatherCategory.SNOW: (71, 73, 75, 85, 86),
    WeatherCategory.THUNDERSTORM: (95, 96, 99),
}

_CODE_CATEGORIES: Dict[int, WeatherCategory] = {
    code: category for category, codes in _CATEGORY_CODES.items() for code in codes
}

KNOWN_CODES = frozenset(_CODE_CATEGORIES)

_DESCRIPTIONS: Dict[WeatherCategory, str] = {
    WeatherCategory.CLEAR: "Clear sky",
    WeatherCategory.PARTLY_CLOUDY: "Partly cloudy",
    WeatherCategory.OVERCAST: "Overcast",
    WeatherCategory.FOG: "Fog",
    WeatherCategory.RAIN: "Rain",
    WeatherCategory.SNOW: "Snow",
    WeatherCategory.THUNDERSTORM: "Thunderstorm",
    WeatherCategory.UNKNOWN: "Unknown",
}

_ICONS: Dict[WeatherCategory, IconRef] = {
    WeatherCategory.CLEAR: IconRef.SUN,
    WeatherCategory.PARTLY_CLOUDY: IconRef.PARTLY_CLOUDY_DAY,
    WeatherCategory.OVERCAST: IconRef.CLOUD,
    WeatherCategory.FOG: IconRef.FOG_DAY,
    WeatherCategory.RAIN: IconRef.RAIN,
    WeatherCategory.SNOW: IconRef.SNOW,
    WeatherCategory.THUNDERSTORM: IconRef.STORM,
    WeatherCategory.UNKNOWN: IconRef.THERMOMETER,
}

ICON_BASE_URL = "https://img.icons8.com/ios-filled/100/ffffff"


def _as_code(code: object) -> int | None:
    """Return `code` as an int when it is integral, else None."""
    if isinstance(code, bool):
        return None
    if isinstance(code, int):
        return code
    if isinstance(code, float) and code.is_integer():
        return int(code)
    return None


def classify(code: object) -> WeatherCategory:
    """Map a WMO weather code to its category; unrecognized codes are UNKNOWN."""
    as_int = _as_code(code)
    if as_int is None:
        return WeatherCategory.UNKNOWN
    return _CODE_CATEGORIES.get(as_int, WeatherCategory.UNKNOWN)


def describe(code: object) -> str:
    """Human-readable description for a weather code."""
    return _DESCRIPTIONS[classify(code)]


def icon_for(code: object) -> IconRef:
    """Icon reference for a weather code."""
    return _ICONS[classify(code)]


def icon_url(icon: IconRef) -> str:
    """Image URL for an icon reference."""
    suffix = "sun--v1" if icon is IconRef.SUN else icon.value
    return f"{ICON_BASE_URL}/{suffix}.png"
