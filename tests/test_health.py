from __future__ import annotations


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "ok"


def test_healthz(client):
    response = client.get("/api/v1/healthz")

    assert response.status_code == 200
    assert response.json()["meta"]["source"] == "system"
