"""
Shared fixtures: a fake Open-Meteo behind requests.get, canned payloads,
and a fresh orchestrator per test.
"""

import pytest
import requests

import config
from abilities import weather
from orchestrator import Orchestrator

ATLANTA = {
    "name": "Atlanta",
    "country": "United States",
    "latitude": 33.749,
    "longitude": -84.38798,
}
GEO_HIT = {"results": [ATLANTA]}
GEO_MISS = {"generationtime_ms": 0.5}
FORECAST = {
    "latitude": 33.75,
    "longitude": -84.375,
    "timezone": "America/New_York",
    "current": {"time": "2024-05-01T14:15", "temperature_2m": 37.0, "weather_code": 3},
}


class FakeResponse:
    def __init__(self, payload=None, status_code=200, bad_json=False):
        self._payload = payload
        self.status_code = status_code
        self._bad_json = bad_json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self._bad_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self._payload


class FakeOpenMeteo:
    """
    Stand-in for requests.get. Routes are keyed by URL; a route is a
    FakeResponse, an exception to raise, or a callable taking params.
    """

    def __init__(self):
        self.routes = {}
        self.calls = []

    def route(self, url, response):
        self.routes[url] = response

    def calls_to(self, url):
        return [params for u, params in self.calls if u == url]

    def get(self, url, params=None, timeout=None, **kwargs):
        self.calls.append((url, dict(params or {})))
        route = self.routes.get(url)
        if route is None:
            raise requests.ConnectionError(f"no route for {url}")
        if isinstance(route, Exception):
            raise route
        if callable(route):
            return route(params or {})
        return route


@pytest.fixture
def http(monkeypatch):
    fake = FakeOpenMeteo()
    monkeypatch.setattr(weather.requests, "get", fake.get)
    return fake


@pytest.fixture
def open_meteo(http):
    """Fake Open-Meteo where every lookup lands on Atlanta."""
    http.route(config.GEO_URL, FakeResponse(GEO_HIT))
    http.route(config.FORECAST_URL, FakeResponse(FORECAST))
    http.route(config.REVERSE_GEO_URL, FakeResponse({"results": [ATLANTA]}))
    return http


@pytest.fixture
def orchestrator():
    return Orchestrator(unit="C")
