from __future__ import annotations

import pytest

from bikeflow.engine import TrafficEngine
from bikeflow.util.time_fmt import format_hhmm, format_minute_label
from bikeflow.viz.app.single import create_app

from helpers import make_station, make_trip


@pytest.fixture
def client():
    engine = TrafficEngine()
    engine.set_stations([make_station("A"), make_station("B", lat=42.37, lon=-71.1)])
    engine.load_trips([make_trip(1430, 10, "A", "B")])
    return create_app(engine, title="Test").test_client()


def test_api_traffic(client):
    resp = client.get("/api/traffic?t=1435")
    assert resp.status_code == 200

    payload = resp.get_json()
    assert payload["is_filtered"] is True
    by_id = {s["id"]: s for s in payload["stations"]}
    assert by_id["A"]["departures"] == 1
    assert by_id["B"]["arrivals"] == 1


def test_api_traffic_defaults_to_all_time(client):
    payload = client.get("/api/traffic").get_json()
    assert payload["minute"] == -1
    assert payload["is_filtered"] is False


@pytest.mark.parametrize("t", ["1440", "-7", "noon"])
def test_api_traffic_rejects_bad_minute(client, t):
    resp = client.get(f"/api/traffic?t={t}")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_map_page_renders_slider(client):
    resp = client.get("/?t=5000")
    assert resp.status_code == 200

    html = resp.get_data(as_text=True)
    assert 'id="time-slider"' in html
    assert 'value="1439"' in html


def test_time_labels():
    assert format_minute_label(-1) == "Any time"
    assert format_minute_label(0) == "12:00 AM"
    assert format_minute_label(754) == "12:34 PM"
    assert format_minute_label(1439) == "11:59 PM"
    assert format_hhmm(65) == "01:05"


def test_api_traffic_carries_marker_style(client):
    filtered = client.get("/api/traffic?t=1435").get_json()
    whole_day = client.get("/api/traffic?t=-1").get_json()

    a = next(s for s in filtered["stations"] if s["id"] == "A")
    assert a["radius"] == pytest.approx(50.0)
    assert a["color"] == "#4682b4"

    a = next(s for s in whole_day["stations"] if s["id"] == "A")
    assert a["radius"] == pytest.approx(25.0)

    quiet = client.get("/api/traffic?t=600").get_json()
    b = next(s for s in quiet["stations"] if s["id"] == "B")
    assert b["radius"] == pytest.approx(3.0)
    assert b["color"] == "#a26c8a"


def test_map_page_updates_circles_from_api(client):
    html = client.get("/?t=1435").get_data(as_text=True)

    assert '"/api/traffic"' in html
    assert "feature_group_" in html
    assert "setRadius" in html
