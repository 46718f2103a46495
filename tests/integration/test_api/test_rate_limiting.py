"""Test rate limiting functionality."""
import pytest


@pytest.mark.integration
@pytest.mark.rate_limit
class TestRateLimiting:
    """Rate limits on write endpoints."""

    def test_purge_rate_limit(self, approver_client):
        """Purging is limited to 10 calls per minute."""
        for i in range(10):
            response = approver_client.post("/api/v1/helpdesk/purge-trashed")
            assert response.status_code == 200, f"Request {i+1} should succeed under 10/min limit"

        response = approver_client.post("/api/v1/helpdesk/purge-trashed")
        assert response.status_code == 429, "Request 11 should be rate limited with 429 status"
