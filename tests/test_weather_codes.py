import pytest

from abilities.weather_codes import UNKNOWN, WEATHER_CODES, classify

EXPECTED = {
    0: ("Clear sky", "☀️"),
    1: ("Mainly clear", "🌤️"),
    2: ("Partly cloudy", "⛅"),
    3: ("Overcast", "☁️"),
    45: ("Fog", "🌫️"),
    48: ("Depositing rime fog", "🌫️"),
    51: ("Light drizzle", "🌦️"),
    53: ("Drizzle", "🌦️"),
    55: ("Dense drizzle", "🌧️"),
    61: ("Light rain", "🌧️"),
    63: ("Rain", "🌧️"),
    65: ("Heavy rain", "🌧️"),
}


@pytest.mark.parametrize("code,expected", sorted(EXPECTED.items()))
def test_known_codes(code, expected):
    entry = classify(code)
    assert (entry.label, entry.emoji) == expected


def test_table_is_exactly_the_known_codes():
    assert set(WEATHER_CODES) == set(EXPECTED)


@pytest.mark.parametrize("code", [-1, 4, 44, 99, 10**12, None, 3.0, "3", True])
def test_unknown_codes_fall_back(code):
    assert classify(code) == UNKNOWN
    assert (UNKNOWN.label, UNKNOWN.emoji) == ("Unknown", "❓")


def test_table_is_read_only():
    with pytest.raises(TypeError):
        WEATHER_CODES[99] = UNKNOWN
