"""HTTP transport with timeouts, connection retries, and host-aware rate limiting."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass
from types import TracebackType
from urllib.parse import urlparse

import requests
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential_jitter

from geo6.common.constants import USER_AGENT
from geo6.common.errors import TransportError

RETRYABLE_EXCEPTIONS = (requests.ConnectionError, requests.Timeout)


@dataclass(frozen=True)
class TimeoutConfig:
    connect: float = 10.0
    read: float = 30.0


@dataclass(frozen=True)
class RetryConfig:
    max_attempts: int = 3
    multiplier: float = 0.5
    max_wait: float = 5.0


@dataclass(frozen=True)
class HttpResponse:
    url: str
    status_code: int
    body: str


class HostRateLimiter:
    """Spaces requests to the same host at least ``1 / rate_per_sec`` apart."""

    def __init__(self, rate_per_sec: float) -> None:
        self.min_interval = 1.0 / rate_per_sec
        self.next_slot: dict[str, float] = {}
        self.lock = threading.Lock()

    def acquire(self, host: str) -> None:
        with self.lock:
            now = time.monotonic()
            slot = max(now, self.next_slot.get(host, now))
            self.next_slot[host] = slot + self.min_interval
        wait = slot - now
        if wait > 0:
            time.sleep(wait)


class HttpClient:
    """Thin GET transport; status interpretation is left to the caller."""

    def __init__(
        self,
        *,
        timeout: TimeoutConfig | None = None,
        retry: RetryConfig | None = None,
        rate_limit_per_sec: float | None = None,
    ) -> None:
        self.timeout = timeout or TimeoutConfig()
        self.retry = retry or RetryConfig()
        self.session = requests.Session()
        self.limiter = HostRateLimiter(rate_limit_per_sec) if rate_limit_per_sec else None

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "HttpClient":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _headers(self, headers: dict[str, str] | None) -> dict[str, str]:
        out = {"User-Agent": USER_AGENT, "Accept": "application/json"}
        if headers:
            out.update(headers)
        return out

    def _get(self, url: str, headers: dict[str, str] | None) -> HttpResponse:
        if self.limiter is not None:
            self.limiter.acquire(urlparse(url).netloc)
        response = self.session.request(
            method="GET",
            url=url,
            headers=self._headers(headers),
            timeout=(self.timeout.connect, self.timeout.read),
        )
        return HttpResponse(url=url, status_code=response.status_code, body=response.text or "")

    def get(self, url: str, *, headers: dict[str, str] | None = None) -> HttpResponse:
        @retry(
            stop=stop_after_attempt(self.retry.max_attempts),
            wait=wait_exponential_jitter(
                initial=self.retry.multiplier,
                max=self.retry.max_wait,
                jitter=self.retry.multiplier,
            ),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            reraise=True,
        )
        def _wrapped() -> HttpResponse:
            return self._get(url, headers)

        try:
            return _wrapped()
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc
