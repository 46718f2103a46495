"""Integration tests for standardized API response formats."""
import pytest


@pytest.mark.integration
class TestErrorResponses:
    """Service errors share one body shape."""

    def test_not_found_format(self, user_client):
        response = user_client.get("/api/v1/sop-files/999")

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {"code": "not_found", "message": "SOP file not found"},
        }

    def test_validation_error_includes_details(self, user_client, room):
        response = user_client.post(
            "/api/v1/meetings",
            json={
                "title": "Backwards",
                "room_id": room.id,
                "start_time": "2025-11-03T11:00:00Z",
                "end_time": "2025-11-03T10:00:00Z",
            },
        )

        data = response.json()
        assert response.status_code == 422
        assert data["success"] is False
        assert data["details"] == {"end_time": "must be after start_time"}

    def test_request_validation_keeps_fastapi_format(self, user_client):
        response = user_client.post("/api/v1/meetings", json={"title": "No room"})

        assert response.status_code == 422
        assert "detail" in response.json()

    def test_missing_token_uses_http_exception_format(self, client):
        response = client.get("/api/v1/meetings")

        assert response.status_code == 401
        assert response.json() == {"detail": "Not authenticated"}


@pytest.mark.integration
class TestHeadersAndHealth:
    """Cross-cutting response behaviour."""

    def test_request_id_and_version_headers(self, user_client):
        response = user_client.get("/api/v1/rooms")

        assert "X-Request-ID" in response.headers
        assert "X-API-Version" in response.headers

    def test_incoming_request_id_is_echoed(self, user_client):
        response = user_client.get("/api/v1/rooms", headers={"X-Request-ID": "portal-abc"})

        assert response.headers["X-Request-ID"] == "portal-abc"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"]["status"] == "connected"
