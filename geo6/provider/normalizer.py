"""Turn Geo-6 response features into Address values, one locale at a time."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from geo6.common.constants import DEFAULT_COUNTRY_CODE, SUPPORTED_LANGUAGES
from geo6.common.logging import get_logger, log_event
from geo6.common.models import Address, AdminLevel, Country

logger = get_logger("normalizer")


class ComponentType(str, Enum):
    COUNTRY = "country"
    LOCALITY = "locality"
    MUNICIPALITY = "municipality"
    POSTAL_CODE = "postal_code"
    PROVINCE = "province"
    REGION = "region"
    STREET = "street"
    STREET_NUMBER = "street_number"

    @classmethod
    def parse(cls, value: object) -> "ComponentType | None":
        try:
            return cls(str(value))
        except ValueError:
            return None


# Components whose value is an identifier rather than a translated name.
ID_FIRST_COMPONENTS = {ComponentType.POSTAL_CODE}

ADMIN_LEVEL_COMPONENTS = (
    (1, ComponentType.REGION),
    (2, ComponentType.PROVINCE),
    (3, ComponentType.MUNICIPALITY),
)


@dataclass(frozen=True)
class ComponentSet:
    latitude: float
    longitude: float
    country: str | None = None
    country_code: str | None = None
    region: str | None = None
    province: str | None = None
    municipality: str | None = None
    locality: str | None = None
    postal_code: str | None = None
    street: str | None = None
    street_number: str | None = None

    def is_valid(self) -> bool:
        return bool(self.municipality and self.postal_code and self.street)


def locale_priority(language: str | None) -> list[str]:
    """Requested language first, then the remaining API languages in fixed order."""
    order: list[str] = []
    for code in (language, *SUPPORTED_LANGUAGES):
        if code and code not in order:
            order.append(code)
    return order


def _text(value: object) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def localized_name(component: dict, priority: Iterable[str]) -> str | None:
    for code in priority:
        name = _text(component.get(f"name_{code}"))
        if name is not None:
            return name
    return None


def _component_value(component_type: ComponentType, component: dict, priority: list[str]) -> str | None:
    if component_type in ID_FIRST_COMPONENTS:
        return _text(component.get("id")) or localized_name(component, priority)
    return localized_name(component, priority) or _text(component.get("id"))


def _coordinates(feature: dict) -> tuple[float, float] | None:
    geometry = feature.get("geometry") or {}
    coordinates = geometry.get("coordinates") or []
    if len(coordinates) < 2:
        return None
    try:
        longitude = float(coordinates[0])
        latitude = float(coordinates[1])
    except (TypeError, ValueError):
        return None
    return latitude, longitude


def extract_components(feature: dict, language: str | None) -> ComponentSet | None:
    point = _coordinates(feature)
    if point is None:
        log_event(logger, "feature without usable geometry skipped", level=logging.DEBUG, event="FEATURE_SKIP")
        return None

    priority = locale_priority(language)
    values: dict[str, str | None] = {}
    country_name = None
    country_code = None
    properties = feature.get("properties") or {}
    for component in properties.get("components") or []:
        component_type = ComponentType.parse(component.get("type"))
        if component_type is None:
            continue
        if component_type is ComponentType.COUNTRY:
            country_name = localized_name(component, priority)
            country_code = _text(component.get("id"))
            continue
        values[component_type.value] = _component_value(component_type, component, priority)

    latitude, longitude = point
    return ComponentSet(
        latitude=latitude,
        longitude=longitude,
        country=country_name,
        country_code=country_code or DEFAULT_COUNTRY_CODE,
        region=values.get(ComponentType.REGION.value),
        province=values.get(ComponentType.PROVINCE.value),
        municipality=values.get(ComponentType.MUNICIPALITY.value),
        locality=values.get(ComponentType.LOCALITY.value),
        postal_code=values.get(ComponentType.POSTAL_CODE.value),
        street=values.get(ComponentType.STREET.value),
        street_number=values.get(ComponentType.STREET_NUMBER.value),
    )


def build_address(components: ComponentSet, language: str | None) -> Address:
    admin_levels = tuple(
        AdminLevel(level=level, name=getattr(components, component_type.value))
        for level, component_type in ADMIN_LEVEL_COMPONENTS
        if getattr(components, component_type.value)
    )
    return Address(
        latitude=components.latitude,
        longitude=components.longitude,
        street_number=components.street_number,
        street_name=components.street,
        postal_code=components.postal_code,
        locality=components.municipality,
        sub_locality=components.locality,
        country=Country(name=components.country, code=components.country_code),
        admin_levels=admin_levels,
        language=language,
    )


def extract(feature: dict, language: str | None) -> Address | None:
    """Return the feature as an Address in ``language``, or None if it is incomplete."""
    components = extract_components(feature, language)
    if components is None or not components.is_valid():
        return None
    return build_address(components, language)


def collect_addresses(features: Iterable[dict], language: str | None) -> list[Address]:
    """Extract every feature following the language preference, without duplicates.

    With a requested language each feature contributes its first extractable
    locale along the fallback chain. Without one, each feature contributes
    one entry per locale that yields a distinct address.
    """
    results: list[Address] = []
    seen: set[Address] = set()
    for feature in features:
        if language:
            candidates = []
            for code in locale_priority(language):
                address = extract(feature, code)
                if address is not None:
                    candidates.append(address)
                    break
        else:
            candidates = [extract(feature, code) for code in SUPPORTED_LANGUAGES]

        for address in candidates:
            if address is None:
                continue
            key = replace(address, language=None)
            if key in seen:
                continue
            seen.add(key)
            results.append(address)
    return results
