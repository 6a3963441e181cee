"""Query and result models shared by the provider and the CLI."""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from typing import Any, Iterator

from geo6.common.constants import DEFAULT_LIMIT, PROVIDER_NAME, SUPPORTED_LANGUAGES
from geo6.common.errors import CollectionIsEmpty, InvalidArgument

_LANGUAGE_RE = re.compile(r"^(" + "|".join(SUPPORTED_LANGUAGES) + r")", re.IGNORECASE)


def language_from_locale(locale: str | None) -> str | None:
    """Map a locale such as ``nl_BE`` to one of the API languages, or None."""
    if not locale:
        return None
    match = _LANGUAGE_RE.match(locale.strip())
    if match is None:
        return None
    return match.group(1).lower()


@dataclass(frozen=True)
class GeocodeQuery:
    text: str = ""
    street_name: str | None = None
    street_number: str | None = None
    postal_code: str | None = None
    locality: str | None = None
    locale: str | None = None
    limit: int = DEFAULT_LIMIT

    @property
    def language(self) -> str | None:
        return language_from_locale(self.locale)


@dataclass(frozen=True)
class ReverseQuery:
    latitude: float
    longitude: float
    radius: float | None = None
    locale: str | None = None
    limit: int = DEFAULT_LIMIT

    def __post_init__(self) -> None:
        if not -90.0 <= float(self.latitude) <= 90.0:
            raise InvalidArgument(f"Latitude must be between -90 and 90, got {self.latitude}.")
        if not -180.0 <= float(self.longitude) <= 180.0:
            raise InvalidArgument(f"Longitude must be between -180 and 180, got {self.longitude}.")
        if self.radius is not None and float(self.radius) <= 0:
            raise InvalidArgument(f"Radius must be positive, got {self.radius}.")

    @property
    def language(self) -> str | None:
        return language_from_locale(self.locale)


@dataclass(frozen=True)
class AdminLevel:
    level: int
    name: str


@dataclass(frozen=True)
class Country:
    name: str | None
    code: str | None


@dataclass(frozen=True)
class Address:
    latitude: float
    longitude: float
    street_number: str | None = None
    street_name: str | None = None
    postal_code: str | None = None
    locality: str | None = None
    sub_locality: str | None = None
    country: Country | None = None
    admin_levels: tuple[AdminLevel, ...] = ()
    language: str | None = None
    provided_by: str = PROVIDER_NAME

    @property
    def country_code(self) -> str | None:
        return self.country.code if self.country else None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class AddressCollection:
    addresses: tuple[Address, ...] = field(default_factory=tuple)

    def __iter__(self) -> Iterator[Address]:
        return iter(self.addresses)

    def __len__(self) -> int:
        return len(self.addresses)

    def __getitem__(self, index: int) -> Address:
        return self.addresses[index]

    def is_empty(self) -> bool:
        return not self.addresses

    def first(self) -> Address:
        if not self.addresses:
            raise CollectionIsEmpty("The address collection is empty.")
        return self.addresses[0]

    def slice(self, offset: int, length: int | None = None) -> "AddressCollection":
        end = None if length is None else offset + length
        return AddressCollection(self.addresses[offset:end])

    def to_list(self) -> list[dict[str, Any]]:
        return [address.to_dict() for address in self.addresses]
