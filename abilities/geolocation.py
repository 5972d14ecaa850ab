"""
Device location capabilities.

A locator is whatever the front end can offer as "where is the user":
the browser's navigator.geolocation result posted back by the widget,
or a location shared in Telegram. The orchestrator only needs
`await locator.current_position()` -> (lat, lon), raising
PlatformLocationError when the device refused or failed.

A front end with no geolocation capability passes no locator at all.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from errors import PlatformLocationError


@dataclass(frozen=True)
class FixedPosition:
    """A position the platform already reported (e.g. a Telegram location)."""
    latitude: float
    longitude: float

    async def current_position(self) -> tuple[float, float]:
        return self.latitude, self.longitude


@dataclass(frozen=True)
class BrowserPosition:
    """
    Outcome of navigator.geolocation.getCurrentPosition as posted by the page.

    Exactly one of (latitude, longitude) or `error` is expected; an empty
    error with no coordinates still counts as a failure.
    """
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    error: str = ""

    async def current_position(self) -> tuple[float, float]:
        if self.error or self.latitude is None or self.longitude is None:
            raise PlatformLocationError(self.error)
        return self.latitude, self.longitude

    @classmethod
    def from_form(cls, form) -> Optional[BrowserPosition]:
        """
        Parse the widget's locate form. Returns None when the browser
        reported no geolocation support.
        """
        if form.get("supported", "1") in ("0", "false", ""):
            return None
        error = form.get("error", "").strip()
        try:
            lat = float(form["latitude"])
            lon = float(form["longitude"])
        except (KeyError, TypeError, ValueError):
            return cls(error=error)
        return cls(latitude=lat, longitude=lon, error=error)
