"""API-level tests for the Flask app."""

import importlib
import logging
from datetime import datetime, timedelta, timezone

import pytest

import app as app_module
from app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def setup_profile(client, weight_kg=80, sex="male"):
    res = client.post("/api/setup", json={"weight_kg": weight_kg, "sex": sex})
    assert res.status_code == 200
    return res.get_json()


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.get_json() == {"ok": True}


def test_presets(client):
    res = client.get("/api/presets")
    assert res.status_code == 200
    data = res.get_json()
    assert data["presets"][0]["id"] == "beer-regular"
    assert data["legal_limits"] == {"regular": 0.05, "professional": 0.02}


def test_state_unconfigured(client):
    res = client.get("/api/state")
    assert res.status_code == 200
    data = res.get_json()
    assert data["configured"] is False
    assert data["curve"] == []
    assert data["sober_at"] is None


def test_setup_clamps_and_parses(client):
    data = setup_profile(client, weight_kg="999", sex="F")
    assert data["weight_kg"] == 200.0
    assert data["sex"] == "female"

    data = setup_profile(client, weight_kg="abc", sex=None)
    assert data["weight_kg"] == 75.0
    assert data["sex"] == "male"


def test_drink_requires_setup(client):
    res = client.post("/api/drink", json={"preset_id": "beer-regular"})
    assert res.status_code == 400
    assert "error" in res.get_json()


def test_unknown_preset(client):
    setup_profile(client)
    res = client.post("/api/drink", json={"preset_id": "absinthe"})
    assert res.status_code == 404


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "Water", "volume_ml": 330, "abv_percent": 0},
        {"name": "Nothing", "volume_ml": 0, "abv_percent": 5},
        {"name": "Too strong", "volume_ml": 40, "abv_percent": 150},
        {"name": "Missing"},
    ],
)
def test_custom_drink_rejected(client, payload):
    setup_profile(client)
    res = client.post("/api/drink", json=payload)
    assert res.status_code == 400


def test_drink_and_state_roundtrip(client):
    setup_profile(client, weight_kg=80, sex="male")

    add = client.post("/api/drink", json={"preset_id": "beer-regular", "minutes_ago": 30})
    assert add.status_code == 200
    drink = add.get_json()["drink"]
    assert drink["name"] == "Beer (4.7%, 0.33L)"

    custom = client.post("/api/drink", json={"name": "Long drink", "volume_ml": 330, "abv_percent": 5.5})
    assert custom.status_code == 200

    state = client.get("/api/state")
    assert state.status_code == 200
    data = state.get_json()
    assert data["configured"] is True
    assert len(data["drinks"]) == 2
    assert data["bac_now"] > 0
    assert data["permille_now"] == pytest.approx(data["bac_now"] * 10, abs=0.01)
    assert data["status"]["status"] in {"below_professional_limit", "below_regular_limit"}
    assert data["sober_at"] is not None
    assert data["sober_at_sampled"] is not None
    assert len(data["curve"]) > 0
    times = [p["time"] for p in data["curve"]]
    assert times == sorted(times)


def test_state_with_explicit_now_is_repeatable(client):
    setup_profile(client)
    client.post("/api/drink", json={"preset_id": "wine", "minutes_ago": 60})
    now = (datetime.now(timezone.utc) + timedelta(minutes=5)).isoformat()

    first = client.get("/api/state", query_string={"now": now}).get_json()
    second = client.get("/api/state", query_string={"now": now}).get_json()
    assert first == second


def test_state_rejects_bad_now(client):
    setup_profile(client)
    res = client.get("/api/state?now=yesterday")
    assert res.status_code == 400


def test_state_far_future_is_sober(client):
    setup_profile(client)
    client.post("/api/drink", json={"preset_id": "spirit"})
    later = (datetime.now(timezone.utc) + timedelta(hours=12)).isoformat()
    data = client.get("/api/state", query_string={"now": later}).get_json()
    assert data["bac_now"] == 0
    assert data["status"]["status"] == "sober"
    assert data["sober_in"] == "You are sober now!"
    assert data["sober_at"] == later


def test_remove_drink_and_reset(client):
    setup_profile(client)
    first = client.post("/api/drink", json={"preset_id": "cider"}).get_json()["drink"]
    client.post("/api/drink", json={"preset_id": "lonkero"})

    res = client.delete(f"/api/drink/{first['id']}")
    assert res.status_code == 200
    assert client.delete(f"/api/drink/{first['id']}").status_code == 404

    data = client.get("/api/state").get_json()
    assert [d["name"] for d in data["drinks"]] == ["Lonkero (5.5%, 0.33L)"]

    assert client.post("/api/reset").status_code == 200
    data = client.get("/api/state").get_json()
    assert data["configured"] is True
    assert data["drinks"] == []
    assert data["bac_now"] == 0
    assert data["sober_at"] is None


def test_setup_keeps_logged_drinks(client):
    setup_profile(client, weight_kg=80, sex="male")
    client.post("/api/drink", json={"preset_id": "beer-strong"})
    now = datetime.now(timezone.utc).isoformat()
    male = client.get("/api/state", query_string={"now": now}).get_json()

    setup_profile(client, weight_kg=80, sex="female")
    female = client.get("/api/state", query_string={"now": now}).get_json()
    assert len(female["drinks"]) == 1
    assert female["bac_now"] > male["bac_now"]


def test_drink_log_is_capped(client, monkeypatch):
    monkeypatch.setattr(app_module, "MAX_DRINKS", 3)
    setup_profile(client)
    for _ in range(3):
        assert client.post("/api/drink", json={"preset_id": "beer-regular"}).status_code == 200

    res = client.post("/api/drink", json={"preset_id": "beer-regular"})
    assert res.status_code == 400
    assert "full" in res.get_json()["error"]
    assert len(client.get("/api/state").get_json()["drinks"]) == 3


def test_import_does_not_configure_logging(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda *args, **kwargs: calls.append(kwargs))
    importlib.reload(app_module)
    assert calls == []
