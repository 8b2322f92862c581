from __future__ import annotations

from types import SimpleNamespace

from scorewrx.metrics import BUILD_VERSION, GIT_SHA, REGISTRY, route_label


def _requests(route: str, method: str = "POST", status: str = "200") -> float:
    labels = {"route": route, "method": method, "status": status}
    return REGISTRY.get_sample_value("scorewrx_http_requests_total", labels) or 0.0


def test_health_reports_build_and_game_env(client):
    data = client.get("/health").json()
    assert data["status"] == "ok"
    assert data["version"] == BUILD_VERSION
    assert data["git"] == GIT_SHA
    assert data["env"] == {"max_strokes": 18, "handicap_format": "Standard"}
    assert data["runtime"]["python"]


def test_health_reflects_settings(monkeypatch, client):
    monkeypatch.setenv("SCOREWRX_MAX_STROKES", "12")
    monkeypatch.setenv("SCOREWRX_HANDICAP_FORMAT", "Custom")
    env = client.get("/health").json()["env"]
    assert env == {"max_strokes": 12, "handicap_format": "Custom"}


def test_requests_are_labelled_by_route_template(client):
    route = "/api/games/dots/validate"
    before = _requests(route)
    response = client.post(route, json={"score": 4, "par": 4})
    assert response.status_code == 200
    assert _requests(route) == before + 1

    latency = REGISTRY.get_sample_value(
        "scorewrx_http_request_latency_seconds_count",
        {"route": route, "method": "POST"},
    )
    assert latency is not None and latency >= 1


def test_unknown_paths_share_one_label(client):
    before = _requests("unmatched", method="GET", status="404")
    assert client.get("/api/games/nope").status_code == 404
    assert client.get("/no/such/path").status_code == 404
    assert _requests("unmatched", method="GET", status="404") == before + 2
    assert REGISTRY.get_sample_value(
        "scorewrx_http_requests_total",
        {"route": "/no/such/path", "method": "GET", "status": "404"},
    ) is None


def test_health_and_scrapes_are_not_counted(client):
    client.get("/health")
    client.get("/metrics")
    for path in ("/health", "/metrics"):
        assert _requests(path, method="GET") == 0.0


def test_metrics_endpoint_exposes_scoring_series(client, course_payload):
    payload = {
        "course": course_payload,
        "settings": {"nines": {"enabled": True}},
        "groups": [
            {
                "id": "g1",
                "players": [
                    {"id": "a", "score": [4] * 18},
                    {"id": "b", "score": [5] * 18},
                ],
            }
        ],
    }
    assert client.post("/api/games/score", json=payload).status_code == 200

    response = client.get("/metrics")
    assert response.status_code == 200
    body = response.text
    assert "scorewrx_build_info{" in body
    assert 'scorewrx_http_requests_total{route="/api/games/score",method="POST",status="200"}' in body
    assert 'scorewrx_games_scored_total{game="dots"}' in body
    assert 'scorewrx_games_skipped_total{game="nines",reason="needs_three_players"}' in body
    assert 'scorewrx_score_latency_ms_count{operation="score"}' in body


def test_route_label_prefers_template():
    routed = {"path": "/api/games/score", "route": SimpleNamespace(path="/api/games/score")}
    assert route_label(routed) == "/api/games/score"
    assert route_label({"path": "/favicon.ico"}) == "unmatched"
