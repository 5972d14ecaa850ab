"""
Orchestrator — drives weather lookups and owns the widget state.

Two entry points feed the same state machine:
  - lookup(city): geocode the name, then fetch current conditions
  - resolve_by_device_location(locator): device coordinates,
    reverse geocode for a display name, then current conditions

Each lookup takes a fresh request token. Only the completion that
matches the latest token is applied, so a slow earlier lookup can
never overwrite a newer one.
"""

from __future__ import annotations
import asyncio
import itertools
import logging
import threading
from collections import OrderedDict
from typing import Optional

from config import MAX_WIDGETS
from abilities import weather
from abilities.units import format_observed_at, format_temperature
from abilities.weather_codes import classify
from errors import GENERIC_MESSAGE, UnsupportedError, WeatherError
from models import CurrentConditions, Place
from store import (
    ERROR,
    LOADING,
    SUCCESS,
    LookupFailed,
    LookupStarted,
    LookupSucceeded,
    QueryChanged,
    UnitToggled,
    WidgetState,
    initial_state,
    is_stale,
    reduce,
)

log = logging.getLogger(__name__)

# requests is blocking; keep the event loop free while it waits.
run_blocking = asyncio.to_thread


class Orchestrator:
    def __init__(self, unit: Optional[str] = None):
        self.state: WidgetState = initial_state(unit) if unit else initial_state()
        self._tokens = itertools.count(1)
        self._lock = threading.Lock()

    def dispatch(self, event) -> WidgetState:
        with self._lock:
            if is_stale(self.state, event):
                log.info(f"Dropping stale result for request {event.token} "
                         f"(latest is {self.state.token})")
            self.state = reduce(self.state, event)
            return self.state

    def _start(self, query: str = "") -> int:
        with self._lock:
            token = next(self._tokens)
            self.state = reduce(self.state, LookupStarted(token, query))
        return token

    # ── Lookups ─────────────────────────────────────────────────

    async def lookup(self, city: str) -> tuple[Place, CurrentConditions]:
        """
        Geocode `city`, then fetch its current conditions.

        Raises the WeatherError that ended the lookup; the state already
        carries its message by then.
        """
        token = self._start(city)
        log.info(f"Lookup #{token}: {city!r}")
        try:
            place = await run_blocking(weather.geocode, city)
            current = await run_blocking(weather.fetch_current, place.lat, place.lon)
        except BaseException as e:
            self._fail(token, e)
            raise
        self.dispatch(LookupSucceeded(token, place, current))
        log.info(f"Lookup #{token}: {place.label} {current.temperature_2m}°C "
                 f"code={current.weather_code}")
        return place, current

    async def resolve_by_device_location(self, locator) -> tuple[Place, CurrentConditions]:
        """
        Look up the weather at the device's current position.

        `locator` is None when the platform has no geolocation support;
        that fails before any network call.
        """
        token = self._start()
        try:
            if locator is None:
                raise UnsupportedError()
            lat, lon = await locator.current_position()
            log.info(f"Lookup #{token}: device position ({lat}, {lon})")
            place = await run_blocking(weather.describe_position, lat, lon)
            current = await run_blocking(weather.fetch_current, lat, lon)
        except BaseException as e:
            self._fail(token, e)
            raise
        self.dispatch(LookupSucceeded(token, place, current))
        return place, current

    def _fail(self, token: int, exc: BaseException):
        # Always leaves the loading state, whatever ended the lookup.
        if isinstance(exc, WeatherError):
            log.warning(f"Lookup #{token} failed: {exc.message} {exc.detail}".rstrip())
            message = exc.message
        elif isinstance(exc, Exception):
            log.exception(f"Lookup #{token} crashed")
            message = GENERIC_MESSAGE
        else:
            log.info(f"Lookup #{token} cancelled")
            message = GENERIC_MESSAGE
        self.dispatch(LookupFailed(token, message))

    # ── UI events ───────────────────────────────────────────────

    def toggle_unit(self) -> str:
        return self.dispatch(UnitToggled()).unit

    def set_query(self, query: str):
        self.dispatch(QueryChanged(query))

    # ── Rendering ───────────────────────────────────────────────

    def view(self) -> dict:
        """Everything a front end needs to render the widget."""
        state = self.state
        data = state.to_dict()
        data["switch_label"] = f"Switch to °{'F' if state.unit == 'C' else 'C'}"
        data["display"] = None
        if state.status == SUCCESS and state.place and state.current:
            entry = classify(state.current.weather_code)
            data["display"] = {
                "location": state.place.label,
                "label": entry.label,
                "emoji": entry.emoji,
                "temperature": format_temperature(state.current.temperature_2m, state.unit),
                "observed_at": format_observed_at(state.current.time),
            }
        return data

    def get_status_text(self) -> str:
        """Plain-text rendering for chat front ends."""
        state = self.state
        if state.status == LOADING:
            return "Loading…"
        if state.status == ERROR:
            return state.error
        display = self.view()["display"]
        if not display:
            return "No weather loaded yet."
        lines = [
            display["location"],
            f"{display['emoji']} {display['label']}",
            display["temperature"],
        ]
        if display["observed_at"]:
            lines.append(display["observed_at"])
        return "\n".join(lines)


class Widgets:
    """
    One orchestrator per session (chat id, browser session).

    Bounded: past `limit` sessions the least recently used one is
    dropped, and that user starts again from a fresh widget.
    """

    def __init__(self, limit: int = MAX_WIDGETS):
        self.limit = limit
        self._items: OrderedDict = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key) -> Orchestrator:
        with self._lock:
            if key in self._items:
                self._items.move_to_end(key)
                return self._items[key]
            widget = Orchestrator()
            self._items[key] = widget
            if len(self._items) > self.limit:
                dropped, _ = self._items.popitem(last=False)
                log.info(f"Dropped widget for session {dropped}")
            return widget

    def __contains__(self, key) -> bool:
        return key in self._items

    def __len__(self) -> int:
        return len(self._items)
