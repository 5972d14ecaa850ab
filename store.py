"""
Widget state — an immutable snapshot plus a pure `reduce(state, event)`.

Nothing is persisted; the orchestrator keeps the latest snapshot in
memory and replaces it on every event.

States:
  idle → loading          LookupStarted
  loading → success       LookupSucceeded (matching token)
  loading → error         LookupFailed (matching token)
  success/error → loading LookupStarted

Completion events carrying anything but the latest token are stale
and leave the state untouched.
"""

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Optional, Union

from config import DEFAULT_UNIT
from abilities.units import normalize_unit, toggle_unit
from models import CurrentConditions, Place

IDLE = "idle"
LOADING = "loading"
SUCCESS = "success"
ERROR = "error"


@dataclass(frozen=True)
class WidgetState:
    status: str = IDLE
    query: str = ""
    unit: str = "C"
    place: Optional[Place] = None
    current: Optional[CurrentConditions] = None
    error: str = ""
    token: int = 0

    @property
    def loading(self) -> bool:
        return self.status == LOADING

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "query": self.query,
            "unit": self.unit,
            "loading": self.loading,
            "place": self.place.to_dict() if self.place else None,
            "current": self.current.to_dict() if self.current else None,
            "error": self.error,
        }


def initial_state(unit: str = DEFAULT_UNIT) -> WidgetState:
    return WidgetState(unit=normalize_unit(unit))


# ── Events ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class LookupStarted:
    token: int
    query: str = ""


@dataclass(frozen=True)
class LookupSucceeded:
    token: int
    place: Place
    current: CurrentConditions


@dataclass(frozen=True)
class LookupFailed:
    token: int
    message: str


@dataclass(frozen=True)
class UnitToggled:
    pass


@dataclass(frozen=True)
class QueryChanged:
    query: str


Event = Union[LookupStarted, LookupSucceeded, LookupFailed, UnitToggled, QueryChanged]


def is_stale(state: WidgetState, event: Event) -> bool:
    return isinstance(event, (LookupSucceeded, LookupFailed)) and event.token != state.token


def reduce(state: WidgetState, event: Event) -> WidgetState:
    if isinstance(event, LookupStarted):
        # Previous results stay visible while loading; only the error goes.
        return replace(
            state,
            status=LOADING,
            query=event.query or state.query,
            error="",
            token=event.token,
        )

    if isinstance(event, (LookupSucceeded, LookupFailed)):
        if is_stale(state, event):
            return state
        if isinstance(event, LookupSucceeded):
            return replace(
                state, status=SUCCESS, place=event.place, current=event.current, error=""
            )
        return replace(state, status=ERROR, place=None, current=None, error=event.message)

    if isinstance(event, UnitToggled):
        return replace(state, unit=toggle_unit(state.unit))

    if isinstance(event, QueryChanged):
        return replace(state, query=event.query)

    raise TypeError(f"Unknown event: {event!r}")
