from models import CurrentConditions, Place
from store import (
    ERROR,
    IDLE,
    LOADING,
    SUCCESS,
    LookupFailed,
    LookupStarted,
    LookupSucceeded,
    QueryChanged,
    UnitToggled,
    WidgetState,
    reduce,
)

PLACE = Place("Atlanta", "United States", 33.749, -84.388)
NOW = CurrentConditions(20.0, 0, "2024-05-01T14:15")


def test_initial_state_is_idle():
    state = WidgetState()
    assert state.status == IDLE
    assert not state.loading
    assert state.place is None and state.current is None and state.error == ""


def test_success_path():
    state = reduce(WidgetState(), LookupStarted(1, "Atlanta"))
    assert state.loading
    assert state.query == "Atlanta"
    state = reduce(state, LookupSucceeded(1, PLACE, NOW))
    assert state.status == SUCCESS
    assert not state.loading
    assert (state.place, state.current, state.error) == (PLACE, NOW, "")


def test_failure_clears_previous_result():
    state = WidgetState(status=SUCCESS, place=PLACE, current=NOW, token=1)
    state = reduce(state, LookupStarted(2, "Atlantis"))
    state = reduce(state, LookupFailed(2, "City not found."))
    assert state.status == ERROR
    assert not state.loading
    assert state.place is None and state.current is None
    assert state.error == "City not found."


def test_new_lookup_clears_error():
    state = WidgetState(status=ERROR, error="City not found.", token=1)
    state = reduce(state, LookupStarted(2, "Atlanta"))
    assert state.status == LOADING
    assert state.error == ""


def test_stale_completion_is_ignored():
    state = reduce(WidgetState(), LookupStarted(1, "Slowtown"))
    state = reduce(state, LookupStarted(2, "Fasttown"))
    assert reduce(state, LookupSucceeded(1, PLACE, NOW)) is state
    assert reduce(state, LookupFailed(1, "boom")) is state


def test_unit_toggle_and_query_change_keep_status():
    state = WidgetState(status=SUCCESS, place=PLACE, current=NOW, unit="C")
    state = reduce(state, UnitToggled())
    assert state.unit == "F" and state.status == SUCCESS
    state = reduce(state, QueryChanged("Paris"))
    assert state.query == "Paris" and state.place == PLACE


def test_to_dict():
    state = WidgetState(status=SUCCESS, place=PLACE, current=NOW)
    d = state.to_dict()
    assert d["loading"] is False
    assert d["place"]["name"] == "Atlanta"
    assert d["current"]["weather_code"] == 0
