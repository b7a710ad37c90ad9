import pytest
from fastapi.testclient import TestClient


CHROME_WINDOWS = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


def shorten(client: TestClient, long_url: str, **extra):
    return client.post("/api/v1/shorten", json={"long_url": long_url, **extra})


class TestShortenEndpoint:
    """Test creating short URLs over HTTP"""

    def test_create_short_url(self, client: TestClient):
        """Test creating a short URL"""
        response = shorten(client, "https://www.google.com/")
        assert response.status_code == 201

        data = response.json()
        assert len(data["alias"]) == 6
        assert data["short_url"].endswith(f"/{data['alias']}")
        assert data["long_url"] == "https://www.google.com/"
        assert "created_at" in data

    def test_create_with_custom_alias_and_topic(self, client: TestClient):
        """Test creating a short URL with a custom alias and topic"""
        response = shorten(client, "https://www.python.org/", custom_alias="py-home", topic="dev")
        assert response.status_code == 201

        data = response.json()
        assert data["alias"] == "py-home"
        assert data["topic"] == "dev"

    def test_custom_alias_taken(self, client: TestClient):
        """Test reusing a custom alias"""
        shorten(client, "https://www.python.org/", custom_alias="py-home")

        response = shorten(client, "https://www.github.com/", custom_alias="py-home")
        assert response.status_code == 409
        assert response.json()["kind"] == "alias_taken"

    def test_empty_long_url(self, client: TestClient):
        """Test rejecting an empty long URL"""
        response = shorten(client, "")
        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_input"

    def test_missing_long_url(self, client: TestClient):
        """Test request body validation"""
        response = client.post("/api/v1/shorten", json={})
        assert response.status_code == 422  # Validation error

    @pytest.mark.parametrize("alias", ["health", "docs", "api", "Health"])
    def test_reserved_custom_alias(self, client: TestClient, alias):
        """Test that a custom alias shadowing an app route is rejected"""
        response = shorten(client, "https://www.python.org/", custom_alias=alias)
        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_input"

        health = client.get("/health", follow_redirects=False)
        assert health.status_code == 200
        assert health.json()["status"] == "healthy"


class TestRedirectEndpoint:
    """Test alias resolution over HTTP"""

    def test_redirect_url(self, client: TestClient):
        """Test redirecting to the original URL"""
        alias = shorten(client, "https://www.github.com/").json()["alias"]

        response = client.get(f"/{alias}", follow_redirects=False)
        assert response.status_code == 302
        assert response.headers["location"] == "https://www.github.com/"

    def test_redirect_nonexistent_url(self, client: TestClient):
        """Test redirecting a non-existent alias"""
        response = client.get("/zzzzzz", follow_redirects=False)
        assert response.status_code == 404
        assert response.json()["kind"] == "alias_not_found"


class TestAnalyticsEndpoints:
    """Test analytics reports over HTTP"""

    def test_alias_analytics(self, client: TestClient):
        """Test per-alias analytics after two clicks"""
        alias = shorten(client, "https://www.stackoverflow.com/").json()["alias"]
        client.get(f"/{alias}", headers={"User-Agent": CHROME_WINDOWS}, follow_redirects=False)
        client.get(f"/{alias}", headers={"User-Agent": CHROME_WINDOWS}, follow_redirects=False)

        response = client.get(f"/api/v1/analytics/{alias}")
        assert response.status_code == 200

        data = response.json()
        assert data["alias"] == alias
        assert data["total_clicks"] == 2
        assert data["unique_users"] == 1
        assert len(data["clicks_by_date"]) == 7
        assert data["clicks_by_date"][-1]["count"] == 2
        assert data["device_breakdown"] == [{"value": "Desktop", "unique_clicks": 2, "unique_users": 1}]

    def test_alias_analytics_unknown(self, client: TestClient):
        """Test analytics for an unknown alias"""
        response = client.get("/api/v1/analytics/zzzzzz")
        assert response.status_code == 404

    def test_overall_analytics(self, client: TestClient):
        """Test overall analytics before and after clicks"""
        assert client.get("/api/v1/analytics/overall").status_code == 404

        first = shorten(client, "https://one.example/").json()["alias"]
        shorten(client, "https://two.example/")
        client.get(f"/{first}", follow_redirects=False)

        response = client.get("/api/v1/analytics/overall")
        assert response.status_code == 200

        data = response.json()
        assert data["total_urls"] == 2
        assert data["total_clicks"] == 1
        assert data["unique_users"] == 1

    def test_topic_analytics(self, client: TestClient):
        """Test analytics grouped by topic"""
        alias = shorten(client, "https://one.example/", topic="news").json()["alias"]
        shorten(client, "https://two.example/", topic="news")
        client.get(f"/{alias}", follow_redirects=False)

        response = client.get("/api/v1/analytics/topic/news")
        assert response.status_code == 200

        data = response.json()
        assert data["topic"] == "news"
        assert data["total_clicks"] == 1
        assert len(data["urls"]) == 2

    def test_topic_analytics_no_data(self, client: TestClient):
        """Test a topic with no URLs"""
        response = client.get("/api/v1/analytics/topic/nothing-here")
        assert response.status_code == 404
        assert response.json()["kind"] == "no_data"


class TestServiceEndpoints:
    """Test info endpoints"""

    def test_health(self, client: TestClient):
        """Test health check"""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_root(self, client: TestClient):
        """Test root endpoint"""
        response = client.get("/")
        assert response.status_code == 200
        assert "version" in response.json()
