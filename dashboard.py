"""
Web widget — single Flask page plus a small JSON API.

Provides:
  - The widget page: search form, °C/°F toggle, "Use My Location"
  - Form actions that drive the visitor's orchestrator and redirect back
  - REST API for programmatic lookups

Each browser session gets its own orchestrator, keyed by an id kept in
the signed Flask session cookie. API lookups run on a throwaway
orchestrator and never touch page state.

The orchestrator is async; each request runs its coroutine on a
short-lived event loop.
"""

import asyncio
import logging
import uuid

from flask import Flask, render_template, request, jsonify, redirect, session, url_for

from config import WIDGET_SECRET, DEFAULT_CITY, DEFAULT_UNIT
from abilities.geolocation import BrowserPosition, FixedPosition
from abilities.units import format_temperature, normalize_unit
from abilities.weather_codes import classify
from errors import NotFoundError, UnsupportedError, WeatherError
from orchestrator import Orchestrator, Widgets
from store import IDLE

log = logging.getLogger(__name__)

_widgets = None  # set via create_app()


def _run(coro):
    # asyncio.run also waits for the to_thread executor to shut down
    return asyncio.run(coro)


def current_widget() -> Orchestrator:
    """The orchestrator behind this visitor's session."""
    if "widget_id" not in session:
        session["widget_id"] = uuid.uuid4().hex[:12]
    return _widgets.get(session["widget_id"])


def _payload(place, current, unit: str) -> dict:
    entry = classify(current.weather_code)
    return {
        "place": place.to_dict(),
        "current": current.to_dict(),
        "unit": unit,
        "label": entry.label,
        "emoji": entry.emoji,
        "temperature": format_temperature(current.temperature_2m, unit),
    }


def _error_response(e: WeatherError):
    if isinstance(e, NotFoundError):
        status = 404
    elif isinstance(e, UnsupportedError):
        status = 400
    else:
        status = 502
    return jsonify({"error": e.message}), status


def create_app(widgets=None):
    global _widgets
    _widgets = widgets if widgets is not None else Widgets()

    app = Flask(__name__)
    app.secret_key = WIDGET_SECRET

    # ── Page ────────────────────────────────────────────────

    @app.route("/")
    def index():
        widget = current_widget()
        # First visit shows the default city, like the widget's initial load
        if widget.state.status == IDLE and DEFAULT_CITY:
            try:
                _run(widget.lookup(DEFAULT_CITY))
            except WeatherError:
                pass  # already in state.error
        return render_template("widget.html", view=widget.view())

    # ── Form actions ────────────────────────────────────────

    @app.route("/action/search", methods=["POST"])
    def action_search():
        widget = current_widget()
        city = request.form.get("city", "")
        widget.set_query(city)
        try:
            _run(widget.lookup(city))
        except WeatherError:
            pass
        return redirect(url_for("index"))

    @app.route("/action/unit", methods=["POST"])
    def action_unit():
        current_widget().toggle_unit()
        return redirect(url_for("index"))

    @app.route("/action/locate", methods=["POST"])
    def action_locate():
        widget = current_widget()
        locator = BrowserPosition.from_form(request.form)
        try:
            _run(widget.resolve_by_device_location(locator))
        except WeatherError:
            pass
        return redirect(url_for("index"))

    # ── API endpoints ───────────────────────────────────────

    @app.route("/api/state", methods=["GET"])
    def api_state():
        return jsonify(current_widget().view())

    @app.route("/api/weather", methods=["GET"])
    def api_weather():
        city = request.args.get("city", "")
        if not city:
            return jsonify({"error": "city is required"}), 400
        try:
            unit = normalize_unit(request.args.get("unit", DEFAULT_UNIT))
        except ValueError as e:
            return jsonify({"error": str(e)}), 400
        try:
            place, current = _run(Orchestrator(unit).lookup(city))
        except WeatherError as e:
            return _error_response(e)
        return jsonify(_payload(place, current, unit))

    @app.route("/api/weather/coords", methods=["GET"])
    def api_weather_coords():
        try:
            lat = float(request.args["lat"])
            lon = float(request.args["lon"])
            unit = normalize_unit(request.args.get("unit", DEFAULT_UNIT))
        except (KeyError, ValueError):
            return jsonify({"error": "lat and lon must be numbers, unit C or F"}), 400
        try:
            place, current = _run(
                Orchestrator(unit).resolve_by_device_location(FixedPosition(lat, lon))
            )
        except WeatherError as e:
            return _error_response(e)
        return jsonify(_payload(place, current, unit))

    return app
