from __future__ import annotations

import pytest
import requests

from geo6.common.errors import TransportError
from geo6.common.http import HostRateLimiter, HttpClient, RetryConfig


class FakeResponse:
    def __init__(self, status_code: int, text: str = ""):
        self.status_code = status_code
        self.text = text


def test_http_get_returns_status_and_body(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=1))
    seen = {}

    def fake_request(**kwargs):
        seen.update(kwargs)
        return FakeResponse(200, '{"features": []}')

    monkeypatch.setattr(client.session, "request", fake_request)
    response = client.get("https://api.geo6.be/latlng/50,4", headers={"X-Geo6-Consumer": "c"})

    assert response.status_code == 200
    assert response.body == '{"features": []}'
    assert seen["method"] == "GET"
    assert seen["headers"]["Accept"] == "application/json"
    assert seen["headers"]["X-Geo6-Consumer"] == "c"


def test_http_does_not_retry_error_statuses(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=3, multiplier=0, max_wait=0))
    calls = []

    def fake_request(**kwargs):
        calls.append(kwargs)
        return FakeResponse(429, "slow down")

    monkeypatch.setattr(client.session, "request", fake_request)
    response = client.get("https://api.geo6.be/latlng/50,4")

    assert response.status_code == 429
    assert len(calls) == 1


def test_http_retries_connection_errors_then_raises(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=2, multiplier=0, max_wait=0))
    calls = []

    def fake_request(**kwargs):
        calls.append(kwargs)
        raise requests.ConnectionError("boom")

    monkeypatch.setattr(client.session, "request", fake_request)
    with pytest.raises(TransportError):
        client.get("https://api.geo6.be/latlng/50,4")
    assert len(calls) == 2


def test_http_retry_recovers_after_timeout(monkeypatch):
    client = HttpClient(retry=RetryConfig(max_attempts=3, multiplier=0, max_wait=0))
    outcomes = [requests.Timeout("slow"), FakeResponse(200, "{}")]

    def fake_request(**kwargs):
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    monkeypatch.setattr(client.session, "request", fake_request)
    assert client.get("https://api.geo6.be/latlng/50,4").body == "{}"


def test_host_rate_limiter_spaces_requests_per_host(monkeypatch):
    sleeps = []
    monkeypatch.setattr("geo6.common.http.time.monotonic", lambda: 100.0)
    monkeypatch.setattr("geo6.common.http.time.sleep", sleeps.append)
    limiter = HostRateLimiter(rate_per_sec=4.0)

    limiter.acquire("api.geo6.be")
    limiter.acquire("api.geo6.be")
    limiter.acquire("other.example")

    assert sleeps == [0.25]
    assert limiter.next_slot == {"api.geo6.be": 100.5, "other.example": 100.25}
