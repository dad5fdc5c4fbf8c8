"""Tests for /health and / endpoints."""


class TestHealth:

    def test_health_returns_200(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["db"] == "ok"
        assert "uptime_seconds" in data
        assert "version" in data
        assert data["project_count"] == 0

    def test_health_counts_projects(self, client, auth_headers):
        client.post("/api/projects", json={"title": "One"}, headers=auth_headers)
        assert client.get("/health").json()["project_count"] == 1

    def test_root_returns_api_info(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["name"] == "LabDash API"


class TestResponseHeaders:

    def test_response_includes_middleware_headers(self, client):
        resp = client.get("/health")
        assert "x-request-id" in resp.headers
        assert "x-response-time" in resp.headers

    def test_request_id_is_propagated(self, client):
        resp = client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["x-request-id"] == "abc123"


class TestErrorBody:

    def test_lab_exception_is_structured(self, client, auth_headers):
        resp = client.get("/api/projects/does-not-exist", headers=auth_headers)
        assert resp.status_code == 404
        body = resp.json()
        assert body["error"] == "PROJECT_NOT_FOUND"
        assert "message" in body
        assert body["details"]["project_id"] == "does-not-exist"
