"""Tests for API endpoints."""

from datetime import datetime

import pytest
from httpx import ASGITransport, AsyncClient

from config import Config
from shortener.service import URLShortenerService
from shortener.shortcode import ShortCodeGenerator
from shortener.store import URLStore
from web_app import create_app


def make_client(generator: ShortCodeGenerator, fatal_calls: list, **config_overrides) -> AsyncClient:
    """Client for an app whose store uses the given generator."""
    config = Config(base_url="http://testserver", **config_overrides)
    store = URLStore(generator=generator, max_attempts=2)
    app = create_app(
        service_instance=URLShortenerService(store=store, strict_urls=config.strict_urls),
        config=config,
        on_fatal=lambda: fatal_calls.append(True),
    )
    return AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver")


@pytest.mark.asyncio
class TestShorten:
    """Test POST /shorten."""
    
    async def test_shorten_url(self, client, sample_urls):
        response = await client.post("/shorten", json={"url": sample_urls[0]})
        
        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"short_url", "short_code", "original_url"}
        assert data["original_url"] == sample_urls[0]
        assert len(data["short_code"]) == 8
        assert data["short_url"] == f"http://testserver/{data['short_code']}"
    
    async def test_shorten_with_path_prefix(self, fatal_calls):
        async with make_client(ShortCodeGenerator(), fatal_calls, path_prefix="/s") as client:
            response = await client.post("/shorten", json={"url": "https://example.com"})
        
        data = response.json()
        assert data["short_url"] == f"http://testserver/s/{data['short_code']}"
    
    async def test_missing_url(self, client):
        """An object without url is rejected and nothing is stored."""
        response = await client.post("/shorten", json={})
        
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}
        
        health = await client.get("/health")
        assert health.json()["urls_stored"] == 0
    
    async def test_empty_url(self, client):
        response = await client.post("/shorten", json={"url": ""})
        
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}
    
    async def test_null_url(self, client):
        response = await client.post("/shorten", json={"url": None})
        
        assert response.status_code == 400
        assert response.json() == {"error": "URL is required"}
    
    async def test_url_stored_as_submitted(self, client):
        """Surrounding whitespace is kept, and a blank URL is not empty."""
        response = await client.post("/shorten", json={"url": " https://x.io "})
        assert response.status_code == 201
        assert response.json()["original_url"] == " https://x.io "
        
        response = await client.post("/shorten", json={"url": "   "})
        assert response.status_code == 201
    
    async def test_unparsable_body(self, client):
        response = await client.post(
            "/shorten",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )
        
        assert response.status_code == 400
        assert response.json() == {"error": "Invalid JSON"}
    
    async def test_wrong_url_type(self, client):
        response = await client.post("/shorten", json={"url": 42})
        
        assert response.status_code == 400
        assert "error" in response.json()
    
    async def test_strict_mode_rejects_invalid_url(self, fatal_calls):
        async with make_client(ShortCodeGenerator(), fatal_calls, strict_urls=True) as client:
            response = await client.post("/shorten", json={"url": "not-a-url"})
        
        assert response.status_code == 400
        assert response.json()["error"].startswith("Invalid URL")
    
    async def test_same_url_twice(self, client):
        first = await client.post("/shorten", json={"url": "https://example.com"})
        second = await client.post("/shorten", json={"url": "https://example.com"})
        
        assert first.json()["short_code"] != second.json()["short_code"]
    
    async def test_generator_exhausted(self, fatal_calls):
        """Exhaustion is a 500 JSON error, not a crash."""
        generator = ShortCodeGenerator(token_source=lambda n: b"\x00" * n)
        
        async with make_client(generator, fatal_calls) as client:
            first = await client.post("/shorten", json={"url": "https://example.com/1"})
            second = await client.post("/shorten", json={"url": "https://example.com/2"})
            health = await client.get("/health")
        
        assert first.status_code == 201
        assert second.status_code == 500
        assert "error" in second.json()
        assert health.json()["urls_stored"] == 1
        assert not fatal_calls
    
    async def test_entropy_failure_is_fatal(self, fatal_calls):
        def broken(n):
            raise OSError("getrandom failed")
        
        async with make_client(ShortCodeGenerator(token_source=broken), fatal_calls) as client:
            response = await client.post("/shorten", json={"url": "https://example.com"})
        
        assert response.status_code == 503
        assert response.json() == {"error": "Service unavailable"}
        assert fatal_calls == [True]
    
    async def test_get_not_allowed(self, client):
        response = await client.get("/shorten")
        
        assert response.status_code == 405
        assert response.headers["allow"] == "POST"
        assert response.json() == {"error": "Method not allowed"}


@pytest.mark.asyncio
class TestRedirectAndStats:
    """Test GET /{short_code} and GET /stats/{short_code}."""
    
    async def test_round_trip(self, client):
        create = await client.post("/shorten", json={"url": "https://example.com"})
        short_code = create.json()["short_code"]
        
        stats = await client.get(f"/stats/{short_code}")
        
        assert stats.status_code == 200
        data = stats.json()
        assert data["short_code"] == short_code
        assert data["original_url"] == "https://example.com"
        assert data["clicks"] == 0
        datetime.fromisoformat(data["created_at"].replace("Z", "+00:00"))
    
    async def test_redirect_counts_clicks(self, client, sample_urls):
        create = await client.post("/shorten", json={"url": sample_urls[1]})
        short_code = create.json()["short_code"]
        
        for _ in range(3):
            response = await client.get(f"/{short_code}")
            assert response.status_code == 302
            assert response.headers["location"] == sample_urls[1]
        
        stats = await client.get(f"/stats/{short_code}")
        assert stats.json()["clicks"] == 3
    
    async def test_redirect_unknown_code(self, client):
        """Unknown codes are 404 and create nothing."""
        response = await client.get("/nonexistent-code")
        
        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found"}
        
        health = await client.get("/health")
        assert health.json()["urls_stored"] == 0
    
    async def test_stats_unknown_code(self, client):
        response = await client.get("/stats/nonexistent")
        
        assert response.status_code == 404
        assert response.json() == {"error": "Short URL not found"}
    
    async def test_malformed_code(self, client):
        """Codes outside the URL-safe alphabet are 404 on both routes."""
        redirect = await client.get("/bad%20code")
        stats = await client.get("/stats/bad%20code")
        
        assert redirect.status_code == 404
        assert stats.status_code == 404
        assert stats.json() == {"error": "Short URL not found"}
    
    async def test_stats_does_not_count(self, client):
        create = await client.post("/shorten", json={"url": "https://example.com"})
        short_code = create.json()["short_code"]
        
        for _ in range(3):
            await client.get(f"/stats/{short_code}")
        
        stats = await client.get(f"/stats/{short_code}")
        assert stats.json()["clicks"] == 0
    
    async def test_post_to_stats_not_allowed(self, client):
        response = await client.post("/stats/abc12345")
        
        assert response.status_code == 405
        assert "error" in response.json()


@pytest.mark.asyncio
class TestServiceEndpoints:
    """Test GET / and GET /health."""
    
    async def test_service_descriptor(self, client):
        response = await client.get("/")
        
        assert response.status_code == 200
        assert response.json() == {
            "service": "URL Shortener API",
            "version": "1.0.0",
            "endpoints": "POST /shorten, GET /{shortCode}, GET /stats/{shortCode}",
        }
    
    async def test_health_check(self, client):
        create = await client.post("/shorten", json={"url": "https://example.com"})
        await client.get(f"/{create.json()['short_code']}")
        
        response = await client.get("/health")
        
        assert response.status_code == 200
        assert response.json() == {"status": "healthy", "urls_stored": 1, "total_clicks": 1}
