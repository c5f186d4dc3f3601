"""
Integration tests for health and metrics endpoints.
"""
import pytest
from django.urls import reverse


@pytest.mark.integration
class TestHealthEndpoints:
    """Tests for health endpoints."""

    def test_health(self, client):
        """Test the liveness endpoint."""
        response = client.get(reverse("health"))

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_store_health(self, client):
        """Test the store round trip succeeds on the test cache."""
        response = client.get(reverse("health-store"))

        assert response.status_code == 200
        assert response.json()["store"] == "connected"

    def test_ready(self, client):
        """Test the readiness endpoint."""
        response = client.get(reverse("ready"))

        assert response.status_code == 200
        assert response.json()["checks"] == {"store": True}

    def test_correlation_id_is_echoed(self, client):
        """Test the correlation id header round trip."""
        response = client.get(reverse("health"), HTTP_X_CORRELATION_ID="abc-123")

        assert response["X-Correlation-ID"] == "abc-123"

    def test_metrics(self, client):
        """Test the Prometheus endpoint exposes service metrics."""
        client.get(reverse("health"))

        response = client.get(reverse("metrics"))

        assert response.status_code == 200
        assert b"pls_http_requests_total" in response.content
