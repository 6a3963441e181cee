"""Request path construction and query validation."""

from __future__ import annotations

import ipaddress
from decimal import Decimal
from urllib.parse import quote_plus

from geo6.common.constants import GEOCODE_ROUTE, REVERSE_ROUTE
from geo6.common.errors import InvalidArgument, UnsupportedOperation
from geo6.common.models import GeocodeQuery, ReverseQuery

FULL_FORM = "full"
PARTIAL_FORM = "partial"
STREET_FORM = "street"
TEXT_FORM = "text"


def _clean(value: object) -> str:
    if value is None:
        return ""
    return str(value).strip()


def is_ip_literal(text: str) -> bool:
    try:
        ipaddress.ip_address(text.strip())
    except ValueError:
        return False
    return True


def validate_geocode_query(query: GeocodeQuery) -> None:
    text = _clean(query.text)
    if text and is_ip_literal(text):
        raise UnsupportedOperation("The Geo-6 provider does not support IP addresses, only street addresses.")
    if not text and not _clean(query.street_name):
        raise InvalidArgument("Address or street name cannot be empty.")


def select_path_form(query: GeocodeQuery) -> str:
    postal_code = _clean(query.postal_code)
    locality = _clean(query.locality)
    if postal_code and locality:
        return FULL_FORM
    if postal_code or locality:
        return PARTIAL_FORM
    if _clean(query.street_name):
        return STREET_FORM
    return TEXT_FORM


def _join(route: str, segments: list[str]) -> str:
    return route + "/" + "/".join(quote_plus(segment) for segment in segments)


def build_geocode_path(query: GeocodeQuery) -> str:
    form = select_path_form(query)
    street_name = _clean(query.street_name)
    street_number = _clean(query.street_number)
    postal_code = _clean(query.postal_code)
    locality = _clean(query.locality)
    # A street number only makes sense after a street name; neither is sent empty.
    street = [street_name] if street_name else []
    if street and street_number:
        street.append(street_number)

    if form == FULL_FORM:
        segments = [locality, postal_code, *street]
    elif form == PARTIAL_FORM:
        segments = [postal_code or locality, *street]
    elif form == STREET_FORM:
        segments = street
    else:
        segments = [_clean(query.text)]
    return _join(GEOCODE_ROUTE, segments)


def plain_number(value: float | int) -> str:
    """Render a number without exponent notation or trailing zeros."""
    text = format(Decimal(str(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def build_reverse_path(query: ReverseQuery) -> str:
    parts = [plain_number(query.latitude), plain_number(query.longitude)]
    if query.radius is not None:
        parts.append(plain_number(query.radius))
    return f"{REVERSE_ROUTE}/{','.join(parts)}"
