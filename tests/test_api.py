"""
Tests for the probe HTTP endpoints.
"""
import httpx
import pytest
from fastapi.testclient import TestClient

from podprobes.api.rest.app import create_app
from podprobes.config.settings import ProbeSettings, Settings


def _router_factory(make_factory, imds_status=200, imds_body=None, nmi_status=200):
    imds_body = {"access_token": "abc123"} if imds_body is None else imds_body

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "169.254.169.254":
            return httpx.Response(imds_status, json=imds_body)
        return httpx.Response(nmi_status, text="Active")

    return make_factory(handler)


@pytest.fixture
def client_for(settings, make_factory):
    def _make(settings_override=None, **responses) -> TestClient:
        factory = _router_factory(make_factory, **responses)
        app = create_app(settings=settings_override or settings, client_factory=factory)
        return TestClient(app)
    return _make


class TestIdentityEndpoint:
    """Tests for /api/v1/health/identity."""

    def test_healthy_returns_200(self, client_for):
        response = client_for().get("/api/v1/health/identity")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "able to get token" in data["description"]

    def test_unhealthy_returns_503(self, client_for):
        response = client_for(imds_status=500).get("/api/v1/health/identity")

        assert response.status_code == 503
        assert response.json() == {
            "status": "unhealthy",
            "description": "The Pod Identity is not able to get token.",
        }

    def test_token_never_leaks(self, client_for):
        response = client_for().get("/api/v1/health/identity")

        assert "abc123" not in response.text


class TestNMIEndpoint:
    """Tests for /api/v1/health/nmi."""

    def test_healthy_returns_200(self, client_for):
        response = client_for().get("/api/v1/health/nmi")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_unhealthy_returns_503(self, client_for):
        response = client_for(nmi_status=503).get("/api/v1/health/nmi")

        assert response.status_code == 503
        assert response.json()["status"] == "unhealthy"

    def test_missing_host_ip_is_reported_as_misconfigured(self, client_for):
        settings = Settings(probe=ProbeSettings())

        response = client_for(settings_override=settings).get("/api/v1/health/nmi")

        assert response.status_code == 500
        data = response.json()
        assert data["status"] == "misconfigured"
        assert "HOST_IP" in data["description"]


class TestLivenessEndpoint:
    """Tests for the sidecar's own liveness."""

    def test_live(self, client_for):
        response = client_for().get("/api/v1/health/live")

        assert response.status_code == 200
        assert response.json()["alive"] is True
