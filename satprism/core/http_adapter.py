"""
Shared async HTTP client for the index and price providers.

One :class:`HttpClient` per remote service. Requests go through a semaphore
so the price fan-out never opens more than ``concurrent_requests``
connections at once, and transient failures (throttling, gateway errors,
timeouts, refused connections) are retried with exponential backoff.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Type

import httpx
from loguru import logger

from satprism.core.config import HttpSettings
from satprism.version import __version__

DEFAULT_USER_AGENT = f"satprism/{__version__}"


@dataclass
class HttpConfig:
    """Connection settings for one remote service."""

    base_url: str
    timeout: float = 30.0
    max_redirects: int = 5
    verify_ssl: bool = True
    user_agent: str = DEFAULT_USER_AGENT
    headers: Dict[str, str] = field(default_factory=dict)
    concurrent_requests: int = 5

    def __post_init__(self):
        if not self.base_url:
            raise ValueError("base_url cannot be empty")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")
        if self.max_redirects < 0:
            raise ValueError("max_redirects must be non-negative")
        if self.concurrent_requests < 1:
            raise ValueError("concurrent_requests must be at least 1")

    def default_headers(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "application/json", **self.headers}


@dataclass
class RetryConfig:
    """Which failures are retried, how often and how long to wait in between."""

    max_retries: int = 3
    backoff_factor: float = 1.0
    retry_on_status: List[int] = field(default_factory=lambda: [429, 502, 503, 504])
    retry_on_exceptions: List[Type[Exception]] = field(
        default_factory=lambda: [httpx.TimeoutException, httpx.ConnectError]
    )

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError("max_retries must be non-negative")
        if self.backoff_factor < 0:
            raise ValueError("backoff_factor must be non-negative")

    def delay_for(self, attempt: int) -> float:
        """Seconds to wait after the zero-based ``attempt`` failed."""
        return self.backoff_factor * (2**attempt) if self.backoff_factor else 0.0

    def retries_status(self, status_code: int) -> bool:
        return status_code in self.retry_on_status

    def retries_exception(self, error: Exception) -> bool:
        return isinstance(error, tuple(self.retry_on_exceptions))


class HttpClient:
    """
    Lazily opened ``httpx.AsyncClient`` with bounded concurrency and retries.

    A retryable status that persists through every attempt is not raised:
    the final response is returned and the provider decides what it means.
    Retryable exceptions are re-raised after the last attempt.
    """

    def __init__(
        self,
        http_config: HttpConfig,
        retry_config: Optional[RetryConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http_config = http_config
        self.retry_config = retry_config or RetryConfig()
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._slots = asyncio.Semaphore(http_config.concurrent_requests)

    async def __aenter__(self) -> "HttpClient":
        self._open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    def _open(self) -> httpx.AsyncClient:
        if self._client is None:
            config = self.http_config
            self._client = httpx.AsyncClient(
                base_url=config.base_url,
                timeout=httpx.Timeout(config.timeout),
                follow_redirects=True,
                max_redirects=config.max_redirects,
                verify=config.verify_ssl,
                headers=config.default_headers(),
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _send_once(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        client = self._open()
        async with self._slots:
            return await client.request(method, url, **kwargs)

    async def _backoff(self, url: str, attempt: int, reason: str) -> None:
        delay = self.retry_config.delay_for(attempt)
        logger.warning(
            "Retrying {url} in {delay}s after {reason} (attempt {attempt})",
            url=url,
            delay=delay,
            reason=reason,
            attempt=attempt + 1,
        )
        await asyncio.sleep(delay)

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        retry = self.retry_config
        for attempt in range(retry.max_retries + 1):
            retries_left = attempt < retry.max_retries
            try:
                response = await self._send_once(method, url, **kwargs)
            except Exception as error:
                if not (retries_left and retry.retries_exception(error)):
                    raise
                await self._backoff(url, attempt, type(error).__name__)
                continue

            if retries_left and retry.retries_status(response.status_code):
                await self._backoff(url, attempt, f"status {response.status_code}")
                continue
            return response

        raise AssertionError("unreachable: the last attempt always returns or raises")  # pragma: no cover

    async def get(self, url: str, **kwargs: Any) -> httpx.Response:
        return await self.request("GET", url, **kwargs)


def create_http_client(
    base_url: str,
    settings: HttpSettings,
    headers: Optional[Dict[str, str]] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> HttpClient:
    """Build an :class:`HttpClient` from the ``[http]`` config section."""
    return HttpClient(
        HttpConfig(
            base_url=base_url,
            timeout=settings.timeout,
            headers=dict(headers or {}),
            concurrent_requests=settings.concurrent_requests,
        ),
        RetryConfig(max_retries=settings.max_retries, backoff_factor=settings.backoff_factor),
        transport=transport,
    )


__all__ = ["HttpConfig", "RetryConfig", "HttpClient", "create_http_client"]
