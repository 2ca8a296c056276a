# tests/test_health.py
from http import HTTPStatus


def test_health_endpoint_ok(client):
    """
    /health responds with 200 OK and the expected JSON shape, without
    touching the timetable data.
    """
    response = client.get("/health")

    assert response.status_code == HTTPStatus.OK
    data = response.json()

    assert data["status"] == "ok"
    assert data["app_name"] == "Timetable Engine"
    assert data["environment"] == "test"
    assert "timestamp_utc" in data


def test_unknown_route_is_not_found(client):
    response = client.get("/timetable")

    assert response.status_code == HTTPStatus.NOT_FOUND


def test_health_is_documented_as_liveness_check(client):
    operation = client.get("/openapi.json").json()["paths"]["/health"]["get"]

    assert operation["summary"] == "Liveness check"
    assert "HealthResponse" in str(operation["responses"]["200"])
