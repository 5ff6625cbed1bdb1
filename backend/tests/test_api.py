"""Integration tests for the HTTP endpoints.

The tracker service is built against a mock marketplace and injected through
``app.dependency_overrides``; the application lifespan is not run.
"""

import random

import httpx
import pytest
from fastapi.testclient import TestClient

from pricewatch.config import Settings, settings
from pricewatch.dependencies import get_tracker_service
from pricewatch.main import app, build_tracker_service
from pricewatch.scrapers.amazon import AmazonProductScraper
from pricewatch.services.cache_service import ProductCache
from pricewatch.services.description_service import DescriptionGenerator
from pricewatch.services.rate_limiter import ClientRateLimiter
from pricewatch.services.tracker_service import PriceTrackerService

US_URL = "https://www.amazon.com/dp/B000000000"
IN_URL = "https://www.amazon.in/dp/B000000000"
BROKEN_URL = "https://www.amazon.com/dp/B0BROKEN00"


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def tracker(clock, page_factory, mock_client_factory) -> PriceTrackerService:
    page = page_factory()
    client = mock_client_factory(
        {
            US_URL: httpx.Response(200, text=page),
            IN_URL: httpx.Response(200, text=page),
            BROKEN_URL: httpx.Response(200, text="<html><body>Robot check</body></html>"),
        }
    )
    return PriceTrackerService(
        scraper=AmazonProductScraper(http_client=client, clock=clock),
        cache=ProductCache(clock=clock),
        rate_limiter=ClientRateLimiter(clock=clock),
        describer=DescriptionGenerator(rng=random.Random(1)),
    )


@pytest.fixture
def client(tracker):
    app.dependency_overrides[get_tracker_service] = lambda: tracker
    yield TestClient(app)
    app.dependency_overrides.clear()


# ============================================================================
# TESTS: POST /api/track-price
# ============================================================================

class TestTrackPriceEndpoint:
    """Tests for POST /api/track-price."""

    def test_product_id_india(self, client):
        response = client.post(
            "/api/track-price", json={"productId": "B000000000", "zipCode": "201301"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["url"] == IN_URL
        assert data["currency"] == "₹"
        assert data["price"] == "1,299."
        assert data["name"] == "Acme Gaming Laptop 15.6 inch"
        assert data["imageUrl"] == "https://m.media-amazon.com/images/I/acme.jpg"
        assert data["description"] == "A fast laptop for gaming."
        assert data["zipCode"] == "201301"
        assert data["overview"]
        assert data["timestamp"].startswith("2024-01-01T12:00:00")

    def test_product_id_us(self, client):
        response = client.post(
            "/api/track-price", json={"productId": "B000000000", "zipCode": "10001"}
        )

        assert response.status_code == 200
        assert response.json()["url"] == US_URL
        assert response.json()["currency"] == "$"

    def test_product_url(self, client):
        response = client.post(
            "/api/track-price",
            json={
                "productUrl": "https://www.amazon.com/Acme-Laptop/dp/B000000000/ref=sr_1?th=1",
                "zipCode": "10001",
            },
        )

        assert response.status_code == 200
        assert response.json()["url"] == US_URL

    def test_missing_image_omitted(self, client, tracker, page_factory, clock):
        tracker.scraper.http_client = httpx.AsyncClient(
            transport=httpx.MockTransport(
                lambda request: httpx.Response(200, text=page_factory(image_html=""))
            )
        )

        response = client.post(
            "/api/track-price", json={"productId": "B000000001", "zipCode": "10001"}
        )

        assert response.status_code == 200
        assert "imageUrl" not in response.json()

    @pytest.mark.parametrize(
        "body, message",
        [
            ({"zipCode": "10001"}, "Either productUrl or productId is required"),
            ({"productId": "B000000000"}, "ZIP/PIN code is required"),
            (
                {"productUrl": "https://www.ebay.com/itm/1", "zipCode": "10001"},
                "Only Amazon.in and Amazon.com URLs are currently supported",
            ),
            ({"productUrl": "not-a-url", "zipCode": "10001"}, "Please enter a valid URL"),
        ],
    )
    def test_validation_errors(self, client, body, message):
        response = client.post("/api/track-price", json=body)

        assert response.status_code == 400
        assert response.json() == {"message": message}

    def test_invalid_json(self, client):
        response = client.post(
            "/api/track-price",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid JSON in request body"}

    def test_wrong_field_type(self, client):
        response = client.post("/api/track-price", json={"productId": 123, "zipCode": "10001"})

        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid request body: productId ")

    def test_non_object_body(self, client):
        """Test that an error without a field name has no empty field segment."""
        response = client.post("/api/track-price", json=["B000000000", "10001"])

        assert response.status_code == 400
        message = response.json()["message"]
        assert message.startswith("Invalid request body: ")
        assert "  " not in message

    def test_non_json_content_type(self, client):
        response = client.post(
            "/api/track-price",
            content=b'{"productId": "B000000000", "zipCode": "10001"}',
            headers={"Content-Type": "text/plain"},
        )

        assert response.status_code == 400
        assert "  " not in response.json()["message"]

    def test_rate_limit_returns_429(self, client):
        body = {"productId": "B000000000", "zipCode": "10001"}
        headers = {"X-Forwarded-For": "9.9.9.9, 10.0.0.1"}

        for _ in range(10):
            assert client.post("/api/track-price", json=body, headers=headers).status_code == 200

        response = client.post("/api/track-price", json=body, headers=headers)
        assert response.status_code == 429
        assert response.json() == {"message": "Rate limit exceeded. Please try again later."}

        response = client.post("/api/track-price", json=body, headers=headers)
        assert response.status_code == 429
        assert "temporarily blocked" in response.json()["message"]

        # A different client is unaffected
        other = client.post("/api/track-price", json=body, headers={"X-Real-IP": "8.8.8.8"})
        assert other.status_code == 200

    def test_fetch_failure_returns_500(self, client):
        response = client.post(
            "/api/track-price", json={"productId": "B0MISSING0", "zipCode": "10001"}
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch product page: 404 Not Found"}

    def test_extraction_failure_returns_500(self, client):
        response = client.post(
            "/api/track-price", json={"productId": "B0BROKEN00", "zipCode": "10001"}
        )

        assert response.status_code == 500
        assert response.json() == {"message": "Could not extract product name"}

    def test_unexpected_error_returns_500(self, client, tracker):
        async def explode(request, client_id):
            raise KeyError("boom")

        tracker.track = explode

        response = client.post(
            "/api/track-price", json={"productId": "B000000000", "zipCode": "10001"}
        )

        assert response.status_code == 500
        assert "boom" in response.json()["message"]


# ============================================================================
# TESTS: INFORMATIONAL ROUTES
# ============================================================================

class TestInformationalEndpoints:
    """Tests for the GET routes."""

    def test_get_track_price(self, client):
        response = client.get("/api/track-price")

        assert response.status_code == 200
        assert response.json()["message"].startswith("This endpoint requires a POST request")
        assert response.json()["method"] == "GET"

    def test_get_track_price_with_path(self, client):
        response = client.get("/api/track-price/Acme-Laptop/dp/B000000000")

        assert response.status_code == 200
        assert response.json()["params"] == ["Acme-Laptop", "dp", "B000000000"]

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "services": {"cache": "ok", "rate_limiter": "ok"},
        }

    def test_api_test_get(self, client):
        assert client.get("/api/test").json() == {"message": "API is working"}

    def test_api_test_post_echo(self, client):
        response = client.post("/api/test", json={"hello": "world"})

        assert response.status_code == 200
        assert response.json() == {
            "message": "Received data successfully",
            "receivedData": {"hello": "world"},
        }

    def test_api_test_post_invalid_json(self, client):
        response = client.post(
            "/api/test", content=b"nope", headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["message"].startswith("Error processing request")

    def test_root(self, client):
        data = client.get("/").json()
        assert data["name"] == "PriceWatch API"
        assert data["health"] == "/api/health"


# ============================================================================
# TESTS: APPLICATION WIRING
# ============================================================================

class TestBuildTrackerService:
    """Tests for the services built at startup."""

    def test_default_fetch_timeout(self):
        assert Settings.model_fields["SCRAPER_TIMEOUT_SECONDS"].default == 30.0

    async def test_scraper_uses_configured_timeout(self):
        tracker = build_tracker_service()

        assert tracker.scraper.timeout == settings.SCRAPER_TIMEOUT_SECONDS
        assert tracker.scraper.http_client.timeout == httpx.Timeout(settings.SCRAPER_TIMEOUT_SECONDS)
        assert tracker.cache.ttl.total_seconds() == settings.CACHE_TTL_SECONDS
        assert tracker.rate_limiter.max_requests == settings.RATE_LIMIT_MAX_REQUESTS
        await tracker.close()
