from predictions_api.services.sports import SUPPORTED_SPORTS


def test_root_is_plain_text(make_client):
    resp = make_client().get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert "/api/predictions-by-sport" in resp.text


def test_health(make_client):
    resp = make_client().get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["uptime"] >= 0
    assert isinstance(data["timestamp"], int)


def test_status_reports_provider_without_key(make_client):
    data = make_client(provider="rapidapi").get("/status").json()
    assert data == {"ok": True, "provider": "RapidAPI", "has_api_key": False, "timeout_s": 10.0}


def test_supported_sports(make_client):
    resp = make_client().get("/api/supported-sports")
    assert resp.json() == {"sports": list(SUPPORTED_SPORTS)}


def test_subscriptions(make_client):
    data = make_client().get("/api/subscriptions").json()
    names = [p["name"] for p in data["plans"]]
    assert names == ["Free", "Pro", "Premium"]
    assert [p["price"] for p in data["plans"]] == ["0", "9.99", "24.99"]
    assert all(p["features"] for p in data["plans"])
    assert "updatedAt" in data


def test_legacy_predictions_stub(make_client, upstream_calls):
    data = make_client().get("/api/predictions").json()
    assert len(data["predictions"]) == 2
    assert upstream_calls == []


def test_unknown_route_is_404(make_client):
    resp = make_client().get("/api/nope")
    assert resp.status_code == 404
    assert resp.json() == {"error": "not_found", "path": "/api/nope"}


def test_cors_allows_any_origin(make_client):
    resp = make_client().get("/api/supported-sports", headers={"Origin": "https://front.example"})
    assert resp.headers["access-control-allow-origin"] == "*"
