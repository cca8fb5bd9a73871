"""
Tests for the HTTP API.
"""
import pytest
from fastapi.testclient import TestClient

from app import app


@pytest.fixture
def client(reset_rate_limiter):
    return TestClient(app)


class TestIPRoute:
    """Test cases for GET /v1/ip."""

    def test_returns_forwarded_address(self, client):
        response = client.get("/v1/ip", headers={"X-Forwarded-For": "119.14.55.11, 127.0.0.1"})

        assert response.status_code == 200
        assert response.json() == {"ip": "119.14.55.11"}

    def test_cdn_header_takes_precedence(self, client):
        response = client.get(
            "/v1/ip",
            headers={"CF-Connecting-IP": "198.51.100.7", "X-Real-IP": "198.51.100.8"},
        )

        assert response.json() == {"ip": "198.51.100.7"}

    def test_falls_back_to_connection_peer(self, client):
        response = client.get("/v1/ip")

        assert response.status_code == 200
        assert response.json() == {"ip": "testclient"}

    def test_rate_limited(self, client, reset_rate_limiter, monkeypatch):
        monkeypatch.setattr(reset_rate_limiter, "requests_per_minute", 2)
        headers = {"X-Real-IP": "203.0.113.50"}

        assert client.get("/v1/ip", headers=headers).status_code == 200
        assert client.get("/v1/ip", headers=headers).status_code == 200

        response = client.get("/v1/ip", headers=headers)
        assert response.status_code == 429
        assert response.headers["retry-after"] == "60"

        other = client.get("/v1/ip", headers={"X-Real-IP": "203.0.113.51"})
        assert other.status_code == 200


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
