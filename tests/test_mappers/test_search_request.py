"""Tests for query parameter validation."""

import base64
import json
from datetime import date

import pytest

from stay_search.exceptions.custom import SearchValidationError
from stay_search.mappers.cursor import encode_cursor
from stay_search.mappers.search_request import parse_search_request
from stay_search.schemas.listing import CheckInType, ParkingType, PropertyType

TODAY = date(2025, 6, 1)


def _params(**overrides):
    params = {
        "location": "zlatibor-serbia",
        "checkIn": "2025-07-01",
        "checkOut": "2025-07-04",
        "adults": "2",
    }
    params.update(overrides)
    return {k: v for k, v in params.items() if v is not None}


def _error(params) -> SearchValidationError:
    with pytest.raises(SearchValidationError) as exc_info:
        parse_search_request(params, TODAY)
    return exc_info.value


def test_minimal_request():
    req = parse_search_request(_params(), TODAY)

    assert req.location_identifier == "zlatibor-serbia"
    assert req.is_slug is True
    assert req.check_in == date(2025, 7, 1)
    assert req.check_out == date(2025, 7, 4)
    assert req.nights == 3
    assert req.adults == 2
    assert req.child_ages == []
    assert req.total_guests == 2
    assert req.days_until_check_in == 30
    assert req.cursor is None
    assert req.filters.model_dump(exclude_none=True) == {}


def test_location_id_instead_of_slug():
    req = parse_search_request(_params(location=None, locationId="ChIJ_abc-12345"), TODAY)
    assert req.location_identifier == "ChIJ_abc-12345"
    assert req.is_slug is False


def test_location_required():
    err = _error(_params(location=None))
    assert err.field == "location"
    assert err.message == "location or locationId is required"


def test_location_and_location_id_are_exclusive():
    err = _error(_params(locationId="ChIJ_abc-12345"))
    assert "mutually exclusive" in err.message


@pytest.mark.parametrize("slug", ["ab", "Zlatibor", "zlatibor_serbia", "a" * 101])
def test_invalid_slug(slug):
    err = _error(_params(location=slug))
    assert err.message == "Invalid location slug format"


def test_invalid_location_id():
    err = _error(_params(location=None, locationId="short"))
    assert err.field == "locationId"


def test_check_in_required():
    err = _error(_params(checkIn=None))
    assert err.field == "checkIn"
    assert err.message == "checkIn is required"


def test_check_in_format():
    err = _error(_params(checkIn="01-07-2025"))
    assert err.message == "checkIn must be in YYYY-MM-DD format"


def test_check_in_not_a_real_date():
    err = _error(_params(checkIn="2025-02-30"))
    assert err.message == "Invalid checkIn date"


def test_check_in_in_the_past():
    err = _error(_params(checkIn="2025-05-31"))
    assert err.message == "checkIn cannot be in the past"


def test_check_in_today_is_allowed():
    req = parse_search_request(_params(checkIn="2025-06-01"), TODAY)
    assert req.days_until_check_in == 0


def test_check_out_must_follow_check_in():
    err = _error(_params(checkOut="2025-07-01"))
    assert err.field == "checkOut"
    assert err.message == "checkOut must be after checkIn"


def test_range_limit():
    assert parse_search_request(_params(checkOut="2026-07-01"), TODAY).nights == 365
    err = _error(_params(checkOut="2026-07-02"))
    assert err.message == "Date range cannot exceed 365 days"


@pytest.mark.parametrize("adults", ["0", "51", "abc", "-1", "2.5"])
def test_adults_bounds(adults):
    err = _error(_params(adults=adults))
    assert err.field == "adults"
    assert err.message == "adults must be between 1 and 50"


def test_adults_required():
    assert _error(_params(adults=None)).message == "adults is required"


def test_child_ages_parsed():
    req = parse_search_request(_params(childAges="3, 7,17"), TODAY)
    assert req.child_ages == [3, 7, 17]
    assert req.total_guests == 5


@pytest.mark.parametrize("ages", ["18", "-1", "a", "3,,4"])
def test_child_ages_invalid(ages):
    err = _error(_params(childAges=ages))
    assert err.message == "Each child age must be between 0 and 17"


def test_too_many_children():
    err = _error(_params(childAges=",".join(["5"] * 51)))
    assert err.message == "Maximum 50 children allowed"


def test_total_guests_limit():
    err = _error(_params(adults="40", childAges=",".join(["5"] * 11)))
    assert err.message == "Total guests cannot exceed 50"


def test_boolean_filters():
    req = parse_search_request(_params(hasWIFI="TRUE", petsAllowed="false"), TODAY)
    assert req.filters.has_wifi is True
    assert req.filters.pets_allowed is False
    assert req.filters.has_pool is None


def test_boolean_filter_rejects_other_values():
    err = _error(_params(hasPool="yes"))
    assert err.field == "hasPool"
    assert err.message == "hasPool must be 'true' or 'false'"


def test_categorical_filters():
    req = parse_search_request(
        _params(parkingType="free", checkInType=" lockbox ", propertyType="VILLA"), TODAY
    )
    assert req.filters.parking_type is ParkingType.free
    assert req.filters.check_in_type is CheckInType.lockbox
    assert req.filters.property_type is PropertyType.villa


def test_categorical_filter_rejects_unknown_value():
    err = _error(_params(propertyType="castle"))
    assert err.field == "propertyType"
    assert err.message == "Invalid propertyType"


def test_cursor_decoded():
    key = {"pk": "LOCATION#abc", "sk": "LISTING#l1"}
    req = parse_search_request(_params(cursor=encode_cursor(key)), TODAY)
    assert req.cursor == key


def test_cursor_bad_characters():
    err = _error(_params(cursor="not a cursor!"))
    assert err.field == "cursor"
    assert err.message == "Invalid cursor format"


def test_cursor_too_large():
    err = _error(_params(cursor="A" * 2001))
    assert err.message == "Cursor too large"


def test_cursor_must_hold_an_object():
    cursor = base64.b64encode(json.dumps([1, 2]).encode()).decode()
    assert _error(_params(cursor=cursor)).message == "Invalid cursor"


def test_first_offending_field_wins():
    err = _error(_params(checkIn="bad", adults="0", hasPool="maybe"))
    assert err.field == "checkIn"
