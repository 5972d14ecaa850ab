import pytest

from abilities.units import format_observed_at, format_temperature, toggle_unit


@pytest.mark.parametrize("celsius,unit,expected", [
    (0, "C", "0°C"),
    (0, "F", "32°F"),
    (100, "C", "100°C"),
    (37, "F", "99°F"),
    (21.4, "C", "21°C"),
    (21.5, "C", "22°C"),
    (-2.5, "C", "-2°C"),
    (-40, "F", "-40°F"),
    (0, "f", "32°F"),
])
def test_format_temperature(celsius, unit, expected):
    assert format_temperature(celsius, unit) == expected


def test_small_negative_rounds_to_plain_zero():
    assert format_temperature(-0.4, "C") == "0°C"


def test_unknown_unit_rejected():
    with pytest.raises(ValueError):
        format_temperature(10, "K")


def test_toggle_unit():
    assert toggle_unit("C") == "F"
    assert toggle_unit("f") == "C"


def test_format_observed_at():
    assert format_observed_at("2024-05-01T14:15") == "As of May 01, 2024 02:15 PM"
    assert format_observed_at("yesterday-ish") == "As of yesterday-ish"
    assert format_observed_at("") == ""
