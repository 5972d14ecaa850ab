"""
Weather code classifier — Open-Meteo (WMO) codes to a label and emoji.

Extend WEATHER_CODES to cover more codes; anything missing falls back
to UNKNOWN.
"""

from types import MappingProxyType

from models import WeatherCodeEntry

UNKNOWN = WeatherCodeEntry("Unknown", "❓")

WEATHER_CODES = MappingProxyType({
    0: WeatherCodeEntry("Clear sky", "☀️"),
    1: WeatherCodeEntry("Mainly clear", "🌤️"),
    2: WeatherCodeEntry("Partly cloudy", "⛅"),
    3: WeatherCodeEntry("Overcast", "☁️"),
    45: WeatherCodeEntry("Fog", "🌫️"),
    48: WeatherCodeEntry("Depositing rime fog", "🌫️"),
    51: WeatherCodeEntry("Light drizzle", "🌦️"),
    53: WeatherCodeEntry("Drizzle", "🌦️"),
    55: WeatherCodeEntry("Dense drizzle", "🌧️"),
    61: WeatherCodeEntry("Light rain", "🌧️"),
    63: WeatherCodeEntry("Rain", "🌧️"),
    65: WeatherCodeEntry("Heavy rain", "🌧️"),
})


def classify(code) -> WeatherCodeEntry:
    """Exact integer match only; None, bools and floats are unknown."""
    if type(code) is not int:
        return UNKNOWN
    return WEATHER_CODES.get(code, UNKNOWN)
