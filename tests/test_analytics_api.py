from __future__ import annotations


def test_analytics_report_envelope(client, fake_service):
    response = client.get("/api/v1/analytics", params={"venue_id": "venue-1", "timeframe": "week"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["data"]["totalNetEventIncome"] == 4000
    assert payload["data"]["revenueBreakdown"][0]["name"] == "Tickets"
    assert payload["meta"]["timeWindow"] == "week"
    assert payload["meta"]["source"] == "venue_events"
    assert payload["meta"]["calculationVersion"] == "v1"
    assert fake_service.last_window.duration.days == 7


def test_analytics_defaults_to_month(client):
    response = client.get("/api/v1/analytics", params={"venue_id": "venue-1"})

    assert response.status_code == 200
    assert response.json()["meta"]["timeWindow"] == "month"


def test_analytics_custom_bounds(client, fake_service):
    response = client.get(
        "/api/v1/analytics",
        params={
            "venue_id": "venue-1",
            "timeframe": "year",
            "custom_start": "2026-01-01",
            "custom_end": "2026-01-31",
        },
    )

    assert response.status_code == 200
    assert response.json()["meta"]["timeWindow"] == "custom"
    assert fake_service.last_window.start.isoformat().startswith("2026-01-01")


def test_analytics_rejects_unknown_timeframe(client):
    response = client.get(
        "/api/v1/analytics", params={"venue_id": "venue-1", "timeframe": "fortnight"}
    )

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "unsupported_timeframe"
    assert "custom" in error["details"]["allowed"]


def test_analytics_rejects_inverted_custom_bounds(client):
    response = client.get(
        "/api/v1/analytics",
        params={
            "venue_id": "venue-1",
            "custom_start": "2026-02-01",
            "custom_end": "2026-01-01",
        },
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "bad_request"


def test_analytics_requires_venue(client):
    response = client.get("/api/v1/analytics")

    assert response.status_code == 422
    assert response.json()["error"]["code"] == "validation_error"
