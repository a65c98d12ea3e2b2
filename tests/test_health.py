from datetime import datetime


class TestHealth:
    def test_health_check(self, api_client):
        resp = api_client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["service"] == "Google Sheets API Proxy"
        assert data["version"] == "1.0.0"
        assert datetime.fromisoformat(data["timestamp"]).tzinfo is not None

    def test_service_info_lists_endpoints(self, api_client):
        resp = api_client.get("/")
        assert resp.status_code == 200
        endpoints = resp.json()["endpoints"]
        assert set(endpoints) == {"GET /health", "GET /entries", "POST /entries", "DELETE /entries", "POST /sheets"}


class TestCors:
    def test_preflight(self, api_client, mock_client):
        resp = api_client.options("/entries", headers={
            "Origin": "https://example.com",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "Content-Type",
        })
        assert resp.status_code == 200
        assert resp.headers["access-control-allow-origin"] == "*"
        assert "POST" in resp.headers["access-control-allow-methods"]
        mock_client.append_row.assert_not_called()

    def test_simple_request_has_cors_header(self, api_client):
        resp = api_client.get("/health", headers={"Origin": "https://example.com"})
        assert resp.headers["access-control-allow-origin"] == "*"
