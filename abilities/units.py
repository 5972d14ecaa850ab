"""
Temperature and timestamp formatting for display.
"""

import math
from datetime import datetime

UNITS = ("C", "F")


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def normalize_unit(unit: str) -> str:
    u = (unit or "").strip().upper()
    if u not in UNITS:
        raise ValueError(f"Unknown temperature unit: {unit!r}")
    return u


def format_temperature(celsius: float, unit: str = "C") -> str:
    """Round to the nearest degree (halves go up) and add the unit suffix."""
    u = normalize_unit(unit)
    if u == "F":
        return f"{_round_half_up(celsius * 9 / 5 + 32)}°F"
    return f"{_round_half_up(celsius)}°C"


def toggle_unit(unit: str) -> str:
    return "F" if normalize_unit(unit) == "C" else "C"


def format_observed_at(time: str) -> str:
    if not time:
        return ""
    # Open-Meteo sends local ISO time without seconds, e.g. 2024-05-01T14:15
    try:
        dt = datetime.fromisoformat(time)
    except (TypeError, ValueError):
        return f"As of {time}"
    return f"As of {dt.strftime('%b %d, %Y %I:%M %p')}"
