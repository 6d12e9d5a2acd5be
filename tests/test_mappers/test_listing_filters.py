"""Tests for booking-term and amenity filters."""

from stay_search.mappers.listing_filters import (
    apply_amenity_filters,
    apply_booking_term_filters,
    meets_booking_terms,
)
from stay_search.schemas.listing import ListingCandidate, ParkingType, PropertyType
from stay_search.schemas.search import SearchFilters


def _listing(listing_id="l1", **overrides) -> ListingCandidate:
    data = {
        "listing_id": listing_id,
        "host_id": "h1",
        "name": "Cabin",
        "max_guests": 4,
        "min_booking_nights": 1,
        "max_booking_nights": 30,
        "advance_booking_days": 180,
    }
    data.update(overrides)
    return ListingCandidate(**data)


# --- booking terms ---


def test_within_terms_kept():
    assert meets_booking_terms(_listing(), nights=3, days_until_check_in=30)


def test_min_nights_boundary():
    listing = _listing(min_booking_nights=3)
    assert meets_booking_terms(listing, 3, 0)
    assert not meets_booking_terms(listing, 2, 0)


def test_max_nights_boundary():
    listing = _listing(max_booking_nights=7)
    assert meets_booking_terms(listing, 7, 0)
    assert not meets_booking_terms(listing, 8, 0)


def test_advance_booking_window():
    listing = _listing(advance_booking_days=30)
    assert meets_booking_terms(listing, 3, 30)
    assert not meets_booking_terms(listing, 3, 31)


def test_missing_terms_dropped():
    listing = _listing(advance_booking_days=None)
    assert not meets_booking_terms(listing, 3, 0)


def test_booking_filter_preserves_order():
    listings = [
        _listing("a"),
        _listing("b", min_booking_nights=5),
        _listing("c"),
        _listing("d", max_booking_nights=2),
        _listing("e"),
    ]
    result = apply_booking_term_filters(listings, nights=3, days_until_check_in=10)
    assert [l.listing_id for l in result] == ["a", "c", "e"]


# --- amenities ---


def test_no_filters_keeps_everything():
    listings = [_listing("a"), _listing("b", has_pool=True)]
    assert apply_amenity_filters(listings, SearchFilters()) == listings


def test_boolean_filter_true():
    listings = [_listing("a", has_pool=True), _listing("b", has_pool=False)]
    result = apply_amenity_filters(listings, SearchFilters(has_pool=True))
    assert [l.listing_id for l in result] == ["a"]


def test_boolean_filter_false_is_not_dont_care():
    listings = [_listing("a", pets_allowed=True), _listing("b", pets_allowed=False)]
    result = apply_amenity_filters(listings, SearchFilters(pets_allowed=False))
    assert [l.listing_id for l in result] == ["b"]


def test_wifi_alias_parsed_from_wire():
    listing = ListingCandidate(
        listingId="l1", hostId="h1", name="Flat", maxGuests=2, hasWIFI=True
    )
    assert apply_amenity_filters([listing], SearchFilters(has_wifi=True)) == [listing]


def test_categorical_filters_combine():
    listings = [
        _listing("a", parking_type="FREE", property_type="VILLA"),
        _listing("b", parking_type="FREE", property_type="HOUSE"),
        _listing("c", parking_type="PAID", property_type="VILLA"),
    ]
    filters = SearchFilters(parking_type=ParkingType.free, property_type=PropertyType.villa)
    result = apply_amenity_filters(listings, filters)
    assert [l.listing_id for l in result] == ["a"]
