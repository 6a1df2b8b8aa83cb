from fastapi.testclient import TestClient


def test_track_click(client: TestClient, affiliate_factory):
    affiliate = affiliate_factory()
    r = client.post(
        "/api/v1/tracking/clicks",
        json={"affiliate_code": affiliate.affiliate_code, "ip_address": "10.0.0.1", "user_agent": "Mozilla/5.0"},
    )
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["affiliate_id"] == affiliate.id
    assert body["user_agent"] == "Mozilla/5.0"
    assert body["clicked_at"]


def test_track_click_without_user_agent(client: TestClient, affiliate_factory):
    affiliate = affiliate_factory()
    r = client.post("/api/v1/tracking/clicks", json={"affiliate_code": affiliate.affiliate_code, "ip_address": "10.0.0.2"})
    assert r.status_code == 201
    assert r.json()["user_agent"] is None


def test_track_click_unknown_code(client: TestClient):
    r = client.post("/api/v1/tracking/clicks", json={"affiliate_code": "AFFGHOST", "ip_address": "10.0.0.3"})
    assert r.status_code == 404
    assert r.json()["message"] == "Affiliate not found with code: AFFGHOST"


def test_stats_all_zero_without_activity(client: TestClient, affiliate_factory):
    affiliate = affiliate_factory()
    expected = {
        "total_clicks": 0,
        "total_registrations": 0,
        "total_commission": 0.0,
        "pending_commission": 0.0,
        "verified_commission": 0.0,
    }
    assert client.get(f"/api/v1/tracking/affiliates/{affiliate.id}/stats").json() == expected
    # Unknown affiliate behaves the same
    r = client.get("/api/v1/tracking/affiliates/9999/stats")
    assert r.status_code == 200
    assert r.json() == expected


def test_stats_aggregate(client: TestClient, affiliate_factory, program_factory, registration_factory):
    affiliate = affiliate_factory()
    other = affiliate_factory()
    program = program_factory()
    for ip in ("1.1.1.1", "2.2.2.2", "3.3.3.3"):
        client.post("/api/v1/tracking/clicks", json={"affiliate_code": affiliate.affiliate_code, "ip_address": ip})
    client.post("/api/v1/tracking/clicks", json={"affiliate_code": other.affiliate_code, "ip_address": "9.9.9.9"})
    registration_factory(affiliate, program, commission_amount=150000, verified=True)
    registration_factory(affiliate, program, commission_amount=70000)
    registration_factory(other, program, commission_amount=5000, verified=True)

    stats = client.get(f"/api/v1/tracking/affiliates/{affiliate.id}/stats").json()
    assert stats == {
        "total_clicks": 3,
        "total_registrations": 2,
        "total_commission": 220000.0,
        "pending_commission": 70000.0,
        "verified_commission": 150000.0,
    }

    clicks = client.get(f"/api/v1/tracking/affiliates/{affiliate.id}/clicks").json()
    assert [c["ip_address"] for c in clicks] == ["1.1.1.1", "2.2.2.2", "3.3.3.3"]
    assert client.get("/api/v1/tracking/affiliates/9999/clicks").json() == []
