import base64

import pytest
import requests

from backend.app import app
from backend.services import playback as playback_service
from carstats.visuals.io.geometry import Region

SQUARE = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


@pytest.fixture
def registry(monkeypatch, clock, long_series):
    registry = playback_service.registry
    monkeypatch.setattr(registry, "interval_factory", clock)
    monkeypatch.setattr("backend.routes.playback.get_series", lambda: long_series)
    yield registry
    registry.close_all()


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "ok"


def test_stats_countries(client):
    body = client.get("/stats/countries").get_json()
    assert body["source"]["url"] == "https://www.oica.net/"
    first = body["countries"][0]
    assert first["color"] == "hsl(220, 100%, 30%)"
    cars = [row["cars"] for row in body["countries"]]
    assert cars == sorted(cars, reverse=True)
    assert body["total_cars"] == sum(cars)


def test_stats_brands(client):
    body = client.get("/stats/brands").get_json()
    assert body["brands"][0]["name"] == "Toyota"
    assert body["brands"][0]["percent"] == 12.5


@pytest.mark.parametrize("chart", ["brands", "final_frame"])
def test_generate_image(client, chart):
    resp = client.post("/generate_image", json={"chart": chart})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["filename"] == f"{chart}_visual.jpg"
    assert base64.b64decode(body["image"])[:2] == b"\xff\xd8"


def test_generate_image_choropleth(client, monkeypatch):
    regions = {"France": Region("France", "France", (SQUARE,))}
    monkeypatch.setattr("backend.services.visuals.load_regions", lambda source: regions)
    resp = client.post("/generate_image", json={"chart": "Cars by Country"})
    assert resp.status_code == 200
    assert resp.get_json()["filename"] == "choropleth_visual.jpg"


def test_generate_image_geometry_unavailable(client, monkeypatch):
    def offline(source):
        raise requests.ConnectionError("offline")

    monkeypatch.setattr("backend.services.visuals.load_regions", offline)
    resp = client.post("/generate_image", json={"chart": "choropleth"})
    assert resp.status_code == 502


def test_generate_image_bad_options(client):
    resp = client.post("/generate_image", json={"chart": "final_frame", "top_n": 0})
    assert resp.status_code == 400
    resp = client.post("/generate_image", json={"chart": "pie"})
    assert resp.status_code == 400


def test_generate_animation(client, monkeypatch, swap_series):
    monkeypatch.setattr("backend.services.visuals.get_series", lambda: swap_series)
    resp = client.post(
        "/generate_animation", json={"top_n": 2, "interp_steps": 2, "dpi": 20}
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["filename"] == "brand_output_top_2_animation.gif"
    assert base64.b64decode(body["video"]).startswith(b"GIF8")


def test_generate_animation_bad_options(client):
    resp = client.post("/generate_animation", json={"limit_bar_stretch": "yes"})
    assert resp.status_code == 400
    resp = client.post("/generate_animation", json={"dpi": 5000})
    assert resp.status_code == 400


def test_playback_lifecycle(client, registry, clock):
    resp = client.post("/playback", json={"top_n": 2})
    assert resp.status_code == 201
    body = resp.get_json()
    sid = body["session_id"]
    assert body["running"] is True
    assert body["current_tick_index"] == 0
    assert body["plan"]["timestamp"] == 2000
    assert len(body["plan"]["visible_entries"]) == 2

    clock.advance(3)
    body = client.get(f"/playback/{sid}").get_json()
    assert body["current_tick_index"] == 3
    assert body["controls"]["pause"] is True

    body = client.post(f"/playback/{sid}/pause").get_json()
    assert body["applied"] is True and body["paused"] is True
    body = client.post(f"/playback/{sid}/pause").get_json()
    assert body["applied"] is False

    body = client.post(f"/playback/{sid}/rewind", json={"steps": 2}).get_json()
    assert body["current_tick_index"] == 1
    assert body["plan"]["animated"] is False

    body = client.get(f"/playback/{sid}?progress=0.5").get_json()
    assert body["frame"]["progress"] == 1.0

    body = client.post(f"/playback/{sid}/resume").get_json()
    assert body["applied"] is True
    clock.advance()
    assert client.get(f"/playback/{sid}").get_json()["current_tick_index"] == 2

    resp = client.delete(f"/playback/{sid}")
    assert resp.status_code == 200
    assert clock.active == []
    assert client.get(f"/playback/{sid}").status_code == 404


def test_playback_errors(client, registry):
    assert client.get("/playback/nope").status_code == 404
    assert client.post("/playback/nope/pause").status_code == 404
    assert client.delete("/playback/nope").status_code == 404

    sid = client.post("/playback").get_json()["session_id"]
    assert client.post(f"/playback/{sid}/explode").status_code == 400
    resp = client.post(f"/playback/{sid}/rewind", json={"steps": "many"})
    assert resp.status_code == 400
    assert client.post("/playback", json={"tick_ms": 1}).status_code == 400


def test_playback_session_limit(client, registry, monkeypatch):
    monkeypatch.setattr(registry, "max_sessions", 1)
    assert client.post("/playback").status_code == 201
    assert client.post("/playback").status_code == 503


@pytest.mark.parametrize("value", ["nan", "inf", "-inf"])
def test_playback_frame_rejects_non_finite_progress(client, registry, value):
    sid = client.post("/playback").get_json()["session_id"]
    resp = client.get(f"/playback/{sid}?progress={value}")
    assert resp.status_code == 400
    assert "progress" in resp.get_json()["error"]
