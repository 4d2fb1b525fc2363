"""Tests for app-wide behaviour: health, headers, error shape."""

from fastapi.testclient import TestClient


class TestHealthCheck:
    def test_health_check(self, client: TestClient):
        """Health check returns ok status."""
        response = client.get("/api/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["app"] == "blog-accounts"


class TestBoundary:
    """Responses never leak internals and always share one error shape."""

    def test_security_headers(self, client: TestClient):
        response = client.get("/api/health")
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    def test_unknown_route_shape(self, client: TestClient):
        response = client.get("/api/v1/user/nope")
        assert response.status_code == 404
        assert response.json() == {"success": False, "message": "Not Found"}

    def test_oversized_body_rejected(self, client: TestClient):
        response = client.post(
            "/api/v1/user/register",
            content=b"{}",
            headers={"Content-Type": "application/json", "Content-Length": str(100 * 1024 * 1024)},
        )
        assert response.status_code == 413
        assert response.json()["success"] is False

    def test_cors_allows_credentials(self, client: TestClient):
        from blog_accounts.config import get_settings

        origin = get_settings().CORS_ORIGINS[0]
        response = client.options(
            "/api/v1/user/login",
            headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
        )
        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-credentials"] == "true"
