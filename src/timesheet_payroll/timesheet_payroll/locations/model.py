"""Location metadata attached to clock events and edit requests.

Stored JSON has gone through several shapes over time. They are normalized
once, at the boundary, into a closed set of variants:

- ``CoordinatesLocation``: the old format, ``{"lat", "lng"[, "address"]}``
- ``FullAddressLocation``: the current format, with street-level details
- ``AddressOnlyLocation``: just an address (also the oldest plain-string form)
"""
from __future__ import annotations

import re
from dataclasses import asdict, dataclass
from typing import Any, Literal, Mapping, Optional, Union

NOT_INFORMED = "Not informed"


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


@dataclass(frozen=True)
class CoordinatesLocation:
    lat: float
    lng: float
    address: Optional[str] = None
    kind: Literal["coordinates"] = "coordinates"

    @property
    def full_address(self) -> str:
        return self.address or f"Coordinates: {self.lat}, {self.lng}"


@dataclass(frozen=True)
class FullAddressLocation:
    lat: float
    lng: float
    street: str = NOT_INFORMED
    house_number: str = "S/N"
    neighborhood: str = NOT_INFORMED
    city: str = NOT_INFORMED
    state: str = NOT_INFORMED
    postal_code: str = NOT_INFORMED
    country: str = NOT_INFORMED
    full_address_text: str = "Address not available"
    kind: Literal["full_address"] = "full_address"

    @property
    def full_address(self) -> str:
        return self.full_address_text


@dataclass(frozen=True)
class AddressOnlyLocation:
    address: str
    lat: float = 0.0
    lng: float = 0.0
    kind: Literal["address"] = "address"

    @property
    def full_address(self) -> str:
        return self.address


LocationDetails = Union[CoordinatesLocation, FullAddressLocation, AddressOnlyLocation]


def normalize_location_details(raw: Any) -> Optional[LocationDetails]:
    """Pick the variant from the distinguishing field; unknown shapes give None."""

    if isinstance(raw, (CoordinatesLocation, FullAddressLocation, AddressOnlyLocation)):
        return raw
    if isinstance(raw, str):
        return AddressOnlyLocation(address=raw) if raw.strip() else None
    if not isinstance(raw, Mapping):
        return None

    if raw.get("kind") == "full_address" or "street" in raw or "fullAddress" in raw or "full_address" in raw:
        return FullAddressLocation(
            lat=_as_float(raw.get("lat")),
            lng=_as_float(raw.get("lng")),
            street=raw.get("street") or NOT_INFORMED,
            house_number=raw.get("houseNumber") or raw.get("house_number") or "S/N",
            neighborhood=raw.get("neighborhood") or NOT_INFORMED,
            city=raw.get("city") or NOT_INFORMED,
            state=raw.get("state") or NOT_INFORMED,
            postal_code=raw.get("postalCode") or raw.get("postal_code") or NOT_INFORMED,
            country=raw.get("country") or NOT_INFORMED,
            full_address_text=(
                raw.get("fullAddress") or raw.get("full_address") or raw.get("full_address_text") or "Address not available"
            ),
        )

    if raw.get("lat") is not None and raw.get("lng") is not None:
        return CoordinatesLocation(
            lat=_as_float(raw.get("lat")),
            lng=_as_float(raw.get("lng")),
            address=raw.get("address") or None,
        )

    if raw.get("address"):
        return AddressOnlyLocation(
            address=str(raw["address"]),
            lat=_as_float(raw.get("latitude", raw.get("lat"))),
            lng=_as_float(raw.get("longitude", raw.get("lng"))),
        )

    return None


def location_to_dict(location: Optional[LocationDetails]) -> Optional[dict]:
    return asdict(location) if location is not None else None


def _field_name_variants(field_name: str) -> list[str]:
    snake = re.sub(r"(?<!^)([A-Z])", r"_\1", field_name).lower()
    parts = snake.split("_")
    camel = parts[0] + "".join(p.title() for p in parts[1:])
    variants = [field_name, field_name.lower(), snake, camel]
    return list(dict.fromkeys(variants))


def find_location_field(locations: Optional[Mapping[str, Any]], field_name: str) -> Optional[LocationDetails]:
    """Location of one clock event inside a record's ``locations`` JSON.

    Accepts either spelling of the field (``clock_in`` / ``clockIn``).
    """

    if not locations:
        return None
    for key in _field_name_variants(field_name):
        if locations.get(key):
            return normalize_location_details(locations[key])
    return None
