"""Integration tests for app-wide behaviour: health, auth and headers."""
import pytest

from assocvote.core.config import settings


@pytest.mark.integration
class TestHealth:
    """Test the health endpoint."""

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"]["status"] == "connected"

    def test_version_and_request_id_headers(self, client):
        response = client.get("/health", headers={"X-Request-ID": "req-1"})

        assert response.headers["X-API-Version"] == settings.APP_VERSION
        assert response.headers["X-Request-ID"] == "req-1"


@pytest.mark.integration
class TestAuthentication:
    """Test token handling on protected endpoints."""

    @pytest.mark.parametrize("path", ["/api/v1/votes", "/api/v1/surveys"])
    def test_missing_token(self, client, path):
        response = client.get(path)

        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}

    def test_invalid_token(self, client):
        response = client.get("/api/v1/votes", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401
        assert response.json() == {"detail": "Invalid token"}

    def test_unknown_vote(self, client, member_headers):
        response = client.get("/api/v1/votes/missing", headers=member_headers)

        assert response.status_code == 404
        assert response.json() == {"detail": "Vote not found"}
