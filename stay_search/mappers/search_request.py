"""Turn raw query parameters into a validated SearchRequest.

Checks run in a fixed order and the first violation wins, so a client always
gets one stable message naming one field.
"""

import re
from collections.abc import Mapping
from datetime import date
from enum import StrEnum

from stay_search.exceptions.custom import SearchValidationError
from stay_search.mappers.cursor import InvalidCursorError, decode_cursor
from stay_search.schemas.listing import CheckInType, ParkingType, PropertyType
from stay_search.schemas.search import SearchFilters, SearchRequest

MAX_NIGHTS = 365
MAX_GUESTS = 50
MAX_CHILD_AGE = 17

_SLUG_RE = re.compile(r"^[a-z0-9-]{3,100}$")
_LOCATION_ID_RE = re.compile(r"^[A-Za-z0-9_-]{10,50}$")
_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_INT_RE = re.compile(r"^-?\d+$")

# query parameter -> SearchFilters attribute
BOOLEAN_FILTERS = {
    "petsAllowed": "pets_allowed",
    "hasWIFI": "has_wifi",
    "hasAirConditioning": "has_air_conditioning",
    "hasParking": "has_parking",
    "hasGym": "has_gym",
    "hasPool": "has_pool",
    "hasWorkspace": "has_workspace",
    "instantBook": "instant_book",
}

CATEGORICAL_FILTERS: dict[str, tuple[str, type[StrEnum]]] = {
    "parkingType": ("parking_type", ParkingType),
    "checkInType": ("check_in_type", CheckInType),
    "propertyType": ("property_type", PropertyType),
}


def _get(params: Mapping[str, str], name: str) -> str:
    return (params.get(name) or "").strip()


def _parse_int(value: str) -> int | None:
    if not _INT_RE.match(value):
        return None
    return int(value)


def _parse_date(params: Mapping[str, str], name: str) -> date:
    raw = _get(params, name)
    if not raw:
        raise SearchValidationError(name, f"{name} is required")
    if not _DATE_RE.match(raw):
        raise SearchValidationError(name, f"{name} must be in YYYY-MM-DD format")
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise SearchValidationError(name, f"Invalid {name} date") from None


def _parse_location(params: Mapping[str, str]) -> tuple[str, bool]:
    slug = _get(params, "location")
    location_id = _get(params, "locationId")

    if not slug and not location_id:
        raise SearchValidationError("location", "location or locationId is required")
    if slug and location_id:
        raise SearchValidationError("location", "location and locationId are mutually exclusive")
    if slug:
        if not _SLUG_RE.match(slug):
            raise SearchValidationError("location", "Invalid location slug format")
        return slug, True
    if not _LOCATION_ID_RE.match(location_id):
        raise SearchValidationError("locationId", "Invalid locationId format")
    return location_id, False


def _parse_child_ages(params: Mapping[str, str]) -> list[int]:
    raw = _get(params, "childAges")
    if not raw:
        return []

    parts = raw.split(",")
    if len(parts) > MAX_GUESTS:
        raise SearchValidationError("childAges", f"Maximum {MAX_GUESTS} children allowed")

    ages: list[int] = []
    for part in parts:
        age = _parse_int(part.strip())
        if age is None or age < 0 or age > MAX_CHILD_AGE:
            raise SearchValidationError(
                "childAges", f"Each child age must be between 0 and {MAX_CHILD_AGE}"
            )
        ages.append(age)
    return ages


def _parse_filters(params: Mapping[str, str]) -> SearchFilters:
    values: dict[str, object] = {}

    for param, attr in BOOLEAN_FILTERS.items():
        raw = _get(params, param).lower()
        if not raw:
            continue
        if raw not in ("true", "false"):
            raise SearchValidationError(param, f"{param} must be 'true' or 'false'")
        values[attr] = raw == "true"

    for param, (attr, enum_cls) in CATEGORICAL_FILTERS.items():
        raw = _get(params, param).upper()
        if not raw:
            continue
        try:
            values[attr] = enum_cls(raw)
        except ValueError:
            raise SearchValidationError(param, f"Invalid {param}") from None

    return SearchFilters(**values)


def parse_search_request(params: Mapping[str, str], today: date) -> SearchRequest:
    """Validate query parameters. Raises SearchValidationError on the first bad field."""
    location_identifier, is_slug = _parse_location(params)

    check_in = _parse_date(params, "checkIn")
    if check_in < today:
        raise SearchValidationError("checkIn", "checkIn cannot be in the past")

    check_out = _parse_date(params, "checkOut")
    if check_out <= check_in:
        raise SearchValidationError("checkOut", "checkOut must be after checkIn")
    nights = (check_out - check_in).days
    if nights > MAX_NIGHTS:
        raise SearchValidationError("checkOut", f"Date range cannot exceed {MAX_NIGHTS} days")

    adults_raw = _get(params, "adults")
    if not adults_raw:
        raise SearchValidationError("adults", "adults is required")
    adults = _parse_int(adults_raw)
    if adults is None or adults < 1 or adults > MAX_GUESTS:
        raise SearchValidationError("adults", f"adults must be between 1 and {MAX_GUESTS}")

    child_ages = _parse_child_ages(params)

    total_guests = adults + len(child_ages)
    if total_guests > MAX_GUESTS:
        raise SearchValidationError("childAges", f"Total guests cannot exceed {MAX_GUESTS}")

    cursor = None
    cursor_raw = _get(params, "cursor")
    if cursor_raw:
        try:
            cursor = decode_cursor(cursor_raw)
        except InvalidCursorError as exc:
            raise SearchValidationError("cursor", str(exc)) from None

    return SearchRequest(
        location_identifier=location_identifier,
        is_slug=is_slug,
        check_in=check_in,
        check_out=check_out,
        adults=adults,
        child_ages=child_ages,
        total_guests=total_guests,
        nights=nights,
        days_until_check_in=(check_in - today).days,
        filters=_parse_filters(params),
        cursor=cursor,
    )
