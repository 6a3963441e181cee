"""Geo-6 provider: validated, signed lookups against api.geo6.be."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable
from urllib.parse import urlparse

from geo6.common.config_loader import ProviderConfig
from geo6.common.constants import DEFAULT_ENDPOINT_URL, GEOCODE_ROUTE, PROVIDER_NAME, REVERSE_ROUTE
from geo6.common.errors import (
    GeocoderError,
    InvalidCredentials,
    InvalidServerResponse,
    QuotaExceeded,
)
from geo6.common.http import HttpClient, HttpResponse
from geo6.common.logging import get_logger, log_event
from geo6.common.models import AddressCollection, GeocodeQuery, ReverseQuery
from geo6.common.schema import validate_private_key
from geo6.provider.normalizer import collect_addresses
from geo6.provider.paths import build_geocode_path, build_reverse_path, validate_geocode_query
from geo6.provider.signer import auth_headers, sign


def check_response(response: HttpResponse) -> str:
    status = response.status_code
    if status in (401, 403):
        raise InvalidCredentials("Invalid or missing Geo-6 credentials.")
    if status == 429:
        raise QuotaExceeded("Geo-6 request quota exceeded.")
    if status >= 300:
        raise InvalidServerResponse.create(response.url, status)
    if not response.body.strip():
        raise InvalidServerResponse.empty_response(response.url)
    return response.body


def decode_features(url: str, body: str) -> list[dict[str, Any]]:
    try:
        payload = json.loads(body)
    except ValueError as exc:
        raise InvalidServerResponse.create(url) from exc
    if not isinstance(payload, dict):
        raise InvalidServerResponse.create(url)
    features = payload.get("features") or []
    if not isinstance(features, list):
        raise InvalidServerResponse.create(url)
    return [feature for feature in features if isinstance(feature, dict)]


class Geo6Provider:
    name = PROVIDER_NAME

    def __init__(
        self,
        http_client: HttpClient,
        client_id: str,
        private_key: str,
        *,
        endpoint_url: str = DEFAULT_ENDPOINT_URL,
        referer: str | None = None,
        logger: logging.Logger | None = None,
        clock: Callable[[], float] | None = None,
    ) -> None:
        self.http_client = http_client
        self.client_id = client_id
        self.private_key = validate_private_key(private_key)
        self.base_url = endpoint_url.rstrip("/")
        self.host = urlparse(endpoint_url).hostname or ""
        self.referer = referer
        self.logger = logger or get_logger("provider")
        self.clock = clock or time.time

    @classmethod
    def from_config(cls, config: ProviderConfig, http_client: HttpClient | None = None) -> "Geo6Provider":
        client = http_client or HttpClient(
            timeout=config.timeout,
            retry=config.retry,
            rate_limit_per_sec=config.rate_limit_per_sec,
        )
        return cls(
            client,
            config.client_id,
            config.private_key,
            endpoint_url=config.endpoint_url,
            referer=config.referer,
        )

    def geocode(self, query: GeocodeQuery) -> AddressCollection:
        validate_geocode_query(query)
        path = build_geocode_path(query)
        return self._lookup(GEOCODE_ROUTE, path, query.language, query.limit)

    def reverse(self, query: ReverseQuery) -> AddressCollection:
        path = build_reverse_path(query)
        return self._lookup(REVERSE_ROUTE, path, query.language, query.limit)

    def _headers(self, route: str) -> dict[str, str]:
        token = sign(self.client_id, self.private_key, self.host, "GET", route, now=self.clock())
        headers = auth_headers(self.client_id, token)
        if self.referer:
            headers["Referer"] = self.referer
        return headers

    def _lookup(self, route: str, path: str, language: str | None, limit: int) -> AddressCollection:
        url = self.base_url + path
        started = time.monotonic()
        log_event(self.logger, f"GET {path}", level=logging.DEBUG, event="REQUEST_START", route=route)
        try:
            response = self.http_client.get(url, headers=self._headers(route))
            features = decode_features(url, check_response(response))
        except GeocoderError as exc:
            log_event(
                self.logger,
                str(exc),
                level=logging.WARNING,
                event="REQUEST_FAIL",
                status="error",
                route=route,
                http_status=getattr(exc, "status_code", None),
                duration_ms=int((time.monotonic() - started) * 1000),
                error_code=exc.error_code,
            )
            raise

        addresses = collect_addresses(features, language)
        if limit:
            addresses = addresses[:limit]
        log_event(
            self.logger,
            f"{len(addresses)} address(es) for {route}",
            event="REQUEST_END",
            status="ok",
            route=route,
            http_status=response.status_code,
            duration_ms=int((time.monotonic() - started) * 1000),
            result_count=len(addresses),
        )
        return AddressCollection(tuple(addresses))
