"""Tests for the shared HTTP client."""

import httpx
import pytest

from satprism.core.config import HttpSettings
from satprism.core.http_adapter import HttpClient, HttpConfig, RetryConfig, create_http_client
from satprism.version import __version__


class TestHttpConfig:
    """Test HttpConfig data class."""

    def test_http_config_defaults(self):
        config = HttpConfig(base_url="https://api.example.com")

        assert config.timeout == 30.0
        assert config.max_redirects == 5
        assert config.verify_ssl is True
        assert config.user_agent == f"satprism/{__version__}"
        assert config.headers == {}

    def test_http_config_validation_empty_url(self):
        with pytest.raises(ValueError, match="base_url cannot be empty"):
            HttpConfig(base_url="")

    def test_http_config_validation_negative_timeout(self):
        with pytest.raises(ValueError, match="timeout must be positive"):
            HttpConfig(base_url="https://api.example.com", timeout=-1.0)

    def test_http_config_validation_concurrency(self):
        with pytest.raises(ValueError, match="concurrent_requests must be at least 1"):
            HttpConfig(base_url="https://api.example.com", concurrent_requests=0)


class TestRetryConfig:
    """Test RetryConfig data class."""

    def test_retry_config_defaults(self):
        config = RetryConfig()

        assert config.max_retries == 3
        assert 429 in config.retry_on_status
        assert 503 in config.retry_on_status
        assert httpx.TimeoutException in config.retry_on_exceptions

    def test_retry_config_validation_negative_retries(self):
        with pytest.raises(ValueError, match="max_retries must be non-negative"):
            RetryConfig(max_retries=-1)

    def test_exponential_backoff(self):
        config = RetryConfig(backoff_factor=0.5)

        assert [config.delay_for(attempt) for attempt in range(3)] == [0.5, 1.0, 2.0]
        assert RetryConfig(backoff_factor=0.0).delay_for(4) == 0.0


def _client(handler, max_retries=2) -> HttpClient:
    return HttpClient(
        HttpConfig(base_url="https://api.example.com"),
        RetryConfig(max_retries=max_retries, backoff_factor=0.0),
        transport=httpx.MockTransport(handler),
    )


class TestHttpClient:
    """Test HttpClient request handling."""

    @pytest.mark.asyncio
    async def test_retries_transient_status_then_succeeds(self):
        statuses = iter([503, 502, 200])
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(next(statuses), json={"ok": True})

        async with _client(handler) as client:
            response = await client.get("/ping")

        assert response.status_code == 200
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_exhausted_retries_return_last_response(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(429, text="slow down")

        async with _client(handler, max_retries=1) as client:
            response = await client.get("/ping")

        assert response.status_code == 429
        assert response.text == "slow down"
        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_client_errors_are_not_retried(self):
        calls = []

        def handler(request):
            calls.append(request)
            return httpx.Response(404)

        async with _client(handler) as client:
            response = await client.get("/missing")

        assert response.status_code == 404
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_connect_errors_are_retried_then_raised(self):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler, max_retries=1) as client:
            with pytest.raises(httpx.ConnectError):
                await client.get("/ping")

        assert len(calls) == 2

    @pytest.mark.asyncio
    async def test_default_headers_are_sent(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200)

        client = create_http_client(
            "https://api.example.com",
            HttpSettings(max_retries=0),
            headers={"X-Extra": "1"},
            transport=httpx.MockTransport(handler),
        )
        await client.get("/ping")
        await client.close()

        assert seen[0].headers["User-Agent"] == f"satprism/{__version__}"
        assert seen[0].headers["Accept"] == "application/json"
        assert seen[0].headers["X-Extra"] == "1"

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self):
        client = _client(lambda request: httpx.Response(200))
        await client.get("/ping")

        await client.close()
        await client.close()

        assert client._client is None
