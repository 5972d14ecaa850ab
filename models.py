"""
Data models for places, current conditions, and weather code entries.
"""

from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Optional

from errors import ParseError


@dataclass(frozen=True)
class Place:
    name: str
    country: str
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_result(cls, result: dict) -> Place:
        """Build from one entry of a geocoding `results` list."""
        try:
            return cls(
                name=result.get("name", ""),
                country=result.get("country", ""),
                lat=float(result["latitude"]),
                lon=float(result["longitude"]),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ParseError(detail=f"Bad geocoding result: {e!r}") from e

    @property
    def label(self) -> str:
        if self.country:
            return f"{self.name}, {self.country}"
        return self.name


@dataclass(frozen=True)
class CurrentConditions:
    temperature_2m: float  # °C
    weather_code: Optional[int]  # None when the service sent no usable code
    time: str

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_response(cls, data: dict) -> CurrentConditions:
        """
        Build from a forecast response body (reads its `current` object).

        The temperature is required. A null or malformed weather code is
        kept as None and classified as Unknown at render time.
        """
        try:
            current = data["current"]
            return cls(
                temperature_2m=float(current["temperature_2m"]),
                weather_code=_weather_code(current.get("weather_code")),
                time=str(current.get("time") or ""),
            )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ParseError(detail=f"Bad forecast response: {e!r}") from e


def _weather_code(value) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class WeatherCodeEntry:
    label: str
    emoji: str

    def to_dict(self) -> dict:
        return asdict(self)
