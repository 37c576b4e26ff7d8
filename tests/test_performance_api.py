from __future__ import annotations


def test_calculate_accepts_camel_case_record(client):
    response = client.post(
        "/api/v1/performance/calculate",
        json={
            "dealType": "Percentage",
            "percentageSplit": 80,
            "grossTicketSales": 10000,
            "fbSales": 2000,
            "productionCosts": 1000,
            "ticketsSold": 250,
            "capacity": 500,
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["artistPayout"] == 8000
    assert data["totalGrossRevenue"] == 12000
    assert data["netEventIncome"] == 3000
    assert data["capacityUtilization"] == 50


def test_recalculate_known_performance(client):
    response = client.post("/api/v1/performance/perf-1/recalculate")

    assert response.status_code == 200
    assert response.json()["data"]["netEventIncome"] == 4000


def test_recalculate_unknown_performance_is_404(client):
    response = client.post("/api/v1/performance/perf-404/recalculate")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


def test_past_events_listing(client, fake_service):
    response = client.get(
        "/api/v1/performance/events",
        params={"venue_id": "venue-1", "profit_filter": "loss", "page_size": 10},
    )

    assert response.status_code == 200
    payload = response.json()
    assert payload["pagination"]["totalItems"] == 1
    assert payload["pagination"]["pageSize"] == 10
    assert payload["data"][0]["artistName"] == "The Regulars"
    assert payload["meta"]["timeWindow"] == "all"
    assert fake_service.last_filters.profit_filter.value == "loss"


def test_past_events_rejects_unknown_profit_filter(client):
    response = client.get(
        "/api/v1/performance/events",
        params={"venue_id": "venue-1", "profit_filter": "huge"},
    )

    assert response.status_code == 422
