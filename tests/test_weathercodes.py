import unittest

from weatherlookup import weathercodes
from weatherlookup.weathercodes import IconRef, WeatherCategory, classify, describe, icon_for, icon_url

EXPECTED_ICONS = {
    WeatherCategory.CLEAR: IconRef.SUN,
    WeatherCategory.PARTLY_CLOUDY: IconRef.PARTLY_CLOUDY_DAY,
    WeatherCategory.OVERCAST: IconRef.CLOUD,
    WeatherCategory.FOG: IconRef.FOG_DAY,
    WeatherCategory.RAIN: IconRef.RAIN,
    WeatherCategory.SNOW: IconRef.SNOW,
    WeatherCategory.THUNDERSTORM: IconRef.STORM,
    WeatherCategory.UNKNOWN: IconRef.THERMOMETER,
}


class TestWeatherCodes(unittest.TestCase):
    def test_known_groups(self):
        self.assertEqual(classify(0), WeatherCategory.CLEAR)
        self.assertEqual(classify(2), WeatherCategory.PARTLY_CLOUDY)
        self.assertEqual(classify(3), WeatherCategory.OVERCAST)
        self.assertEqual(classify(48), WeatherCategory.FOG)
        for code in (51, 53, 55, 61, 63, 65, 80, 81, 82):
            self.assertEqual(classify(code), WeatherCategory.RAIN, code)
        for code in (71, 73, 75, 85, 86):
            self.assertEqual(classify(code), WeatherCategory.SNOW, code)
        for code in (95, 96, 99):
            self.assertEqual(classify(code), WeatherCategory.THUNDERSTORM, code)

    def test_unlisted_codes_are_unknown(self):
        for code in (-1, 4, 56, 57, 66, 77, 100, 10_000):
            self.assertEqual(classify(code), WeatherCategory.UNKNOWN, code)
        self.assertEqual(classify(None), WeatherCategory.UNKNOWN)
        self.assertEqual(classify(61.5), WeatherCategory.UNKNOWN)
        self.assertEqual(classify(61.0), WeatherCategory.RAIN)

    def test_icons_partition_codes_like_classification(self):
        for code in range(-5, 120):
            self.assertEqual(icon_for(code), EXPECTED_ICONS[classify(code)], code)

    def test_every_known_code_has_a_non_fallback_icon_and_description(self):
        for code in weathercodes.KNOWN_CODES:
            self.assertNotEqual(icon_for(code), IconRef.THERMOMETER)
            self.assertNotEqual(describe(code), "Unknown")

    def test_descriptions(self):
        self.assertEqual(describe(0), "Clear sky")
        self.assertEqual(describe(63), "Rain")
        self.assertEqual(describe(42), "Unknown")

    def test_icon_url(self):
        self.assertTrue(icon_url(IconRef.SUN).endswith("/sun--v1.png"))
        self.assertTrue(icon_url(IconRef.STORM).endswith("/storm.png"))


if __name__ == "__main__":
    unittest.main()
