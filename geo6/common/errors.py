"""Domain errors and failure typing."""

from __future__ import annotations


class GeocoderError(Exception):
    """Base class for geocoding failures."""

    error_code = "GEOCODER_ERROR"


class ConfigError(GeocoderError):
    """Raised for invalid or missing configuration."""

    error_code = "CONFIG_ERROR"


class InvalidArgument(GeocoderError):
    """Raised when a query does not carry enough data to be sent."""

    error_code = "INVALID_ARGUMENT"


class UnsupportedOperation(GeocoderError):
    """Raised for lookups the upstream API cannot serve."""

    error_code = "UNSUPPORTED_OPERATION"


class InvalidCredentials(GeocoderError):
    error_code = "INVALID_CREDENTIALS"


class QuotaExceeded(GeocoderError):
    error_code = "QUOTA_EXCEEDED"


class InvalidServerResponse(GeocoderError):
    """Raised for HTTP errors, empty bodies, and undecodable payloads."""

    error_code = "INVALID_SERVER_RESPONSE"

    def __init__(self, message: str, *, url: str | None = None, status_code: int | None = None, empty: bool = False):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.empty = empty

    @classmethod
    def create(cls, url: str, status_code: int | None = None) -> "InvalidServerResponse":
        if status_code is None:
            return cls(f'The geocoder server returned an invalid response for query "{url}".', url=url)
        return cls(
            f'The geocoder server returned an invalid response ({status_code}) for query "{url}".',
            url=url,
            status_code=status_code,
        )

    @classmethod
    def empty_response(cls, url: str) -> "InvalidServerResponse":
        return cls(f'The geocoder server returned an empty response for query "{url}".', url=url, empty=True)


class TransportError(GeocoderError):
    """Raised when the request never produced a response."""

    error_code = "TRANSPORT_ERROR"


class CollectionIsEmpty(GeocoderError):
    error_code = "COLLECTION_IS_EMPTY"
