"""Drink Tracker Flask app.

Run from project root:
    python app.py
"""

import logging
import math
import os
from datetime import datetime, timedelta, timezone
from typing import Any

from flask import Flask, jsonify, request, session as flask_session

from drink_tracker.calculations import sober_time_sampled
from drink_tracker.catalog import drink_from_preset, list_presets, make_drink
from drink_tracker.config import (
    DEFAULT_SEX,
    DEFAULT_WEIGHT_KG,
    LOG_LEVEL,
    MAX_DRINKS,
    MAX_MINUTES_AGO,
    MAX_WEIGHT_KG,
    MIN_WEIGHT_KG,
)
from drink_tracker.drinks import Drink, UserProfile
from drink_tracker.graph import curve_data
from drink_tracker.session import Session
from drink_tracker.status import (
    LEGAL_LIMIT_PROFESSIONAL,
    LEGAL_LIMIT_REGULAR,
    bac_status,
    time_until_sober_text,
    to_permille,
)

logger = logging.getLogger("drink_tracker.app")

app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("APP_SECRET_KEY", "dev-only-change-me")
app.config["SESSION_COOKIE_SAMESITE"] = "Lax"
app.config["SESSION_COOKIE_HTTPONLY"] = True
app.config["SESSION_COOKIE_SECURE"] = os.environ.get("SESSION_COOKIE_SECURE", "0") == "1"

SESSION_KEY = "drink_session"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_sex(value: Any, default: str = DEFAULT_SEX) -> str:
    if isinstance(value, bool):
        return "male" if value else "female"
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"male", "m", "true", "1"}:
            return "male"
        if lowered in {"female", "f", "false", "0"}:
            return "female"
    return default


def _clamp_float(value: Any, default: float, min_value: float, max_value: float) -> float:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        parsed = default
    if math.isnan(parsed):
        parsed = default
    return max(min_value, min(max_value, parsed))


def _parse_instant(value: Any) -> datetime | None:
    """ISO 8601 -> aware datetime (naive values are taken as UTC)."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _empty_state() -> dict[str, Any]:
    return {
        "configured": False,
        "bac_now": 0,
        "permille_now": 0,
        "status": bac_status(0),
        "curve": [],
        "sober_at": None,
        "sober_in": "N/A",
        "drinks": [],
        "total_units": 0,
    }


def _drink_to_dict(drink: Drink) -> dict[str, Any]:
    return {
        "id": drink.id,
        "name": drink.name,
        "volume_ml": drink.volume_ml,
        "abv_percent": drink.abv_percent,
        "units": round(drink.standard_units, 2),
        "consumed_at": drink.consumed_at.isoformat(),
    }


def _session_to_cookie(model: Session) -> dict[str, Any]:
    return {
        "sex": model.profile.sex,
        "weight_kg": model.profile.weight_kg,
        "drinks": [_drink_to_dict(d) for d in model.drinks],
    }


def _session_from_cookie(raw: Any) -> Session | None:
    if not isinstance(raw, dict):
        return None

    weight = _clamp_float(raw.get("weight_kg"), DEFAULT_WEIGHT_KG, MIN_WEIGHT_KG, MAX_WEIGHT_KG)
    sex = _parse_sex(raw.get("sex"))
    model = Session(UserProfile(sex=sex, weight_kg=weight))

    drinks_raw = raw.get("drinks", [])
    if isinstance(drinks_raw, list):
        for item in drinks_raw[:MAX_DRINKS]:
            if not isinstance(item, dict):
                continue
            consumed_at = _parse_instant(item.get("consumed_at"))
            if consumed_at is None:
                continue
            try:
                drink = make_drink(
                    str(item.get("name", "")),
                    item.get("volume_ml"),
                    item.get("abv_percent"),
                    consumed_at,
                    drink_id=str(item.get("id", "")) or None,
                )
                model.add_drink(drink)
            except (TypeError, ValueError):
                logger.warning("Dropping malformed drink from cookie: %r", item)
    return model


def get_session() -> Session | None:
    return _session_from_cookie(flask_session.get(SESSION_KEY))


def set_session(model: Session | None):
    if model is None:
        flask_session.pop(SESSION_KEY, None)
        return
    flask_session[SESSION_KEY] = _session_to_cookie(model)


@app.route("/healthz")
def healthz():
    return jsonify({"ok": True})


@app.route("/api/presets")
def api_presets():
    return jsonify({
        "presets": list_presets(),
        "legal_limits": {"regular": LEGAL_LIMIT_REGULAR, "professional": LEGAL_LIMIT_PROFESSIONAL},
    })


@app.route("/api/setup", methods=["POST"])
def api_setup():
    data = request.get_json(silent=True) or {}
    weight = _clamp_float(data.get("weight_kg"), DEFAULT_WEIGHT_KG, MIN_WEIGHT_KG, MAX_WEIGHT_KG)
    sex = _parse_sex(data.get("sex"))

    # Keep the logged drinks when only the profile changes.
    model = get_session()
    new_model = Session(UserProfile(sex=sex, weight_kg=weight))
    if model is not None:
        for drink in model.drinks:
            new_model.add_drink(drink)
    set_session(new_model)
    return jsonify({"ok": True, "weight_kg": weight, "sex": sex})


@app.route("/api/drink", methods=["POST"])
def api_drink():
    model = get_session()
    if model is None:
        return jsonify({"error": "Set weight and sex first"}), 400
    if len(model.drinks) >= MAX_DRINKS:
        return jsonify({"error": f"Drink log is full ({MAX_DRINKS} drinks). Reset to start over."}), 400

    data = request.get_json(silent=True) or {}
    minutes_ago = _clamp_float(data.get("minutes_ago"), 0.0, 0.0, MAX_MINUTES_AGO)
    consumed_at = _utcnow() - timedelta(minutes=minutes_ago)

    if data.get("preset_id"):
        try:
            drink = drink_from_preset(str(data["preset_id"]), consumed_at)
        except KeyError:
            return jsonify({"error": "Unknown preset"}), 404
    else:
        try:
            drink = make_drink(
                str(data.get("name", "")),
                data.get("volume_ml"),
                data.get("abv_percent"),
                consumed_at,
            )
        except (TypeError, ValueError):
            return jsonify({"error": "volume_ml must be > 0 and abv_percent in (0, 100]"}), 400

    model.add_drink(drink)
    set_session(model)
    return jsonify({"ok": True, "drink": _drink_to_dict(drink)})


@app.route("/api/drink/<drink_id>", methods=["DELETE"])
def api_drink_remove(drink_id: str):
    model = get_session()
    if model is None or not model.remove_drink(drink_id):
        return jsonify({"error": "Drink not found"}), 404
    set_session(model)
    return jsonify({"ok": True})


@app.route("/api/state")
def api_state():
    model = get_session()
    if model is None:
        return jsonify(_empty_state())

    now_raw = request.args.get("now", type=str)
    now = _utcnow()
    if now_raw:
        now = _parse_instant(now_raw)
        if now is None:
            return jsonify({"error": "now must be an ISO 8601 timestamp"}), 400

    bac_now = model.bac_now(now)
    sober_at = model.sober_time(now)
    sampled = sober_time_sampled(model.profile, model.drinks, now)

    return jsonify({
        "configured": True,
        "sex": model.profile.sex,
        "weight_kg": model.profile.weight_kg,
        "now": now.isoformat(),
        "bac_now": round(bac_now, 4),
        "permille_now": round(to_permille(bac_now), 2),
        "status": bac_status(bac_now),
        "curve": curve_data(model.series(now)),
        "sober_at": sober_at.isoformat() if sober_at else None,
        "sober_at_sampled": sampled.isoformat() if sampled else None,
        "sober_in": time_until_sober_text(sober_at, now),
        "drinks": [_drink_to_dict(d) for d in model.drinks],
        "total_units": round(model.total_units, 2),
    })


@app.route("/api/reset", methods=["POST"])
def api_reset():
    model = get_session()
    if model is None:
        return jsonify({"ok": True})
    model.clear()
    set_session(model)
    return jsonify({"ok": True})


if __name__ == "__main__":
    logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    port = int(os.environ.get("PORT", 5000))
    app.run(host="0.0.0.0", port=port, debug=os.environ.get("FLASK_DEBUG", "0") == "1")
