"""
Weather ability — free, no API key required.

Uses Open-Meteo geocoding (forward + reverse) and forecast APIs.
All calls are blocking `requests` calls; the orchestrator runs them
off the event loop.
"""

import logging
from typing import Optional

import requests

import config
from errors import NetworkError, NotFoundError, ParseError
from models import CurrentConditions, Place

log = logging.getLogger(__name__)

FALLBACK_NAME = "Your location"


def _get_json(url: str, params: dict) -> dict:
    try:
        resp = requests.get(url, params=params, timeout=config.REQUEST_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise NetworkError(detail=f"GET {url} failed: {e}") from e
    try:
        data = resp.json()
    except ValueError as e:
        raise ParseError(detail=f"Non-JSON response from {url}") from e
    if not isinstance(data, dict):
        raise ParseError(detail=f"Unexpected payload from {url}: {type(data).__name__}")
    return data


def geocode(city: str) -> Place:
    """Resolve a city name to its best-ranked match."""
    data = _get_json(config.GEO_URL, {"name": city, "count": 1})
    results = data.get("results")
    if not results:
        raise NotFoundError(detail=f"No geocoding match for {city!r}")
    return Place.from_result(results[0])


def reverse_geocode(lat: float, lon: float) -> Optional[Place]:
    """Nearest named place for a coordinate pair, or None if there is none."""
    data = _get_json(
        config.REVERSE_GEO_URL,
        {"latitude": lat, "longitude": lon, "count": 1},
    )
    results = data.get("results")
    if not results:
        return None
    return Place.from_result(results[0])


def describe_position(lat: float, lon: float) -> Place:
    """
    Display place for raw device coordinates.

    Best-effort: the reverse lookup only supplies a name, so any failure
    falls back to "Your location" while keeping the device coordinates.
    """
    try:
        found = reverse_geocode(lat, lon)
    except (NetworkError, ParseError) as e:
        log.warning(f"Reverse geocode failed for ({lat}, {lon}): {e.detail}")
        found = None
    if found is None:
        return Place(name=FALLBACK_NAME, country="", lat=lat, lon=lon)
    return Place(name=found.name or FALLBACK_NAME, country=found.country, lat=lat, lon=lon)


def fetch_current(lat: float, lon: float) -> CurrentConditions:
    """Current temperature (°C) and weather code; timezone resolved server-side."""
    data = _get_json(
        config.FORECAST_URL,
        {
            "latitude": lat,
            "longitude": lon,
            "current": "temperature_2m,weather_code",
            "timezone": "auto",
        },
    )
    return CurrentConditions.from_response(data)
