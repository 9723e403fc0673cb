"""Tests for API endpoints."""

import dns.exception
import pytest
from fastapi.testclient import TestClient

from mailguard.api import dependencies
from mailguard.api.main import app
from mailguard.reputation.detector import DetectorConfig, ReputationDetector


@pytest.fixture
def detector(query_client):
    """Install a detector backed by the fake resolver."""
    detector = ReputationDetector(config=DetectorConfig(), query_client=query_client)
    dependencies._detector = detector
    yield detector
    dependencies._detector = None


@pytest.fixture
def client(detector):
    """Create test client."""
    return TestClient(app)


class TestHealthEndpoints:
    """Test health check endpoints."""

    def test_root(self, client):
        """Test root endpoint."""
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_health(self, client):
        """Test detailed health endpoint."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["cache"] == "enabled"
        assert data["details"]["cache_size"] == 0

    def test_metrics(self, client):
        """Test Prometheus metrics endpoint."""
        client.post("/api/v1/reputation/domain", json={"domain": "example.com"})
        response = client.get("/metrics")
        assert response.status_code == 200
        assert "mailguard_lookups_total" in response.text


class TestCheckEndpoints:
    """Test single check endpoints."""

    def test_check_email_clean(self, client):
        """Test clean email."""
        response = client.post(
            "/api/v1/reputation/email", json={"email": "user@sub.example.com"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["subject"] == "user@sub.example.com"
        assert data["domain"] == "sub.example.com"
        assert data["is_threat"] is False
        assert data["threat_type"] is None
        assert data["from_cache"] is False

    def test_check_email_listed(self, client):
        """Test listed email."""
        response = client.post(
            "/api/v1/reputation/email", json={"email": "temp@phish.example"}
        )
        assert response.status_code == 200
        data = response.json()
        assert data["is_threat"] is True
        assert data["threat_type"]["type"] == "phishing"
        assert data["threat_type"]["severity"] == 4

    def test_check_email_invalid(self, client):
        """Test malformed email."""
        response = client.post("/api/v1/reputation/email", json={"email": "invalid-email"})
        assert response.status_code == 422
        assert "Invalid email format" in response.json()["detail"]

    def test_check_domain_cached(self, client):
        """Test second domain check is served from cache."""
        client.post("/api/v1/reputation/domain", json={"domain": "spam.example"})
        response = client.post("/api/v1/reputation/domain", json={"domain": "spam.example"})
        assert response.status_code == 200
        data = response.json()
        assert data["from_cache"] is True
        assert data["threat_type"]["type"] == "spam"

    def test_check_domain_invalid(self, client):
        """Test malformed domain."""
        response = client.post("/api/v1/reputation/domain", json={"domain": "example..com"})
        assert response.status_code == 422

    def test_check_domain_dns_failure(self, client, resolver):
        """Test lookup failure maps to 503."""
        resolver.answers["slow.example"] = dns.exception.Timeout()
        response = client.post("/api/v1/reputation/domain", json={"domain": "slow.example"})
        assert response.status_code == 503
        assert "DNS query failed" in response.json()["detail"]


class TestBatchEndpoints:
    """Test batch endpoints."""

    def test_emails_batch(self, client):
        """Test batch with one bad item."""
        payload = {"emails": ["a@example.com", "bad-email", "b@spam.example"]}
        response = client.post("/api/v1/reputation/emails/batch", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 3
        assert data["threats"] == 1
        assert data["failures"] == 1
        assert [item["subject"] for item in data["results"]] == payload["emails"]
        assert data["results"][1]["error"].startswith("Invalid email format")
        assert data["results"][2]["result"]["is_threat"] is True

    def test_domains_batch(self, client):
        """Test domain batch."""
        payload = {"domains": ["malware.example", "example.org"]}
        response = client.post("/api/v1/reputation/domains/batch", json=payload)
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["threats"] == 1
        assert data["failures"] == 0

    def test_batch_too_large(self, client):
        """Test batch size limit."""
        payload = {"emails": [f"user{i}@example.com" for i in range(101)]}
        response = client.post("/api/v1/reputation/emails/batch", json=payload)
        assert response.status_code == 422


class TestCacheEndpoints:
    """Test cache management endpoints."""

    def test_cache_stats(self, client):
        """Test cache statistics."""
        client.post("/api/v1/reputation/domain", json={"domain": "example.com"})
        response = client.get("/api/v1/reputation/cache")
        assert response.status_code == 200
        assert response.json() == {"enabled": True, "size": 1, "removed": None}

    def test_cache_cleanup(self, client):
        """Test cleanup of a fresh cache removes nothing."""
        client.post("/api/v1/reputation/domain", json={"domain": "example.com"})
        response = client.post("/api/v1/reputation/cache/cleanup")
        assert response.status_code == 200
        assert response.json()["removed"] == 0
        assert response.json()["size"] == 1

    def test_cache_clear(self, client):
        """Test clearing the cache."""
        client.post("/api/v1/reputation/domain", json={"domain": "example.com"})
        response = client.delete("/api/v1/reputation/cache")
        assert response.status_code == 200
        assert response.json()["size"] == 0
