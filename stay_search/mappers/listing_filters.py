"""In-memory candidate filters. No I/O, order preserving."""

from stay_search.schemas.listing import ListingCandidate
from stay_search.schemas.search import SearchFilters

_BOOLEAN_ATTRS = (
    "pets_allowed",
    "has_wifi",
    "has_air_conditioning",
    "has_parking",
    "has_gym",
    "has_pool",
    "has_workspace",
    "instant_book",
)
_CATEGORICAL_ATTRS = ("parking_type", "check_in_type", "property_type")


def meets_booking_terms(
    listing: ListingCandidate, nights: int, days_until_check_in: int
) -> bool:
    """Listing accepts a stay of ``nights`` starting ``days_until_check_in`` days from now.

    A listing missing any of its booking terms is treated as not bookable.
    """
    min_nights = listing.min_booking_nights
    max_nights = listing.max_booking_nights
    advance_days = listing.advance_booking_days
    if min_nights is None or max_nights is None or advance_days is None:
        return False

    if min_nights > nights:
        return False
    if max_nights < nights:
        return False
    # Check-in lies further out than the listing's booking window.
    if advance_days < days_until_check_in:
        return False
    return True


def apply_booking_term_filters(
    listings: list[ListingCandidate], nights: int, days_until_check_in: int
) -> list[ListingCandidate]:
    return [l for l in listings if meets_booking_terms(l, nights, days_until_check_in)]


def matches_filters(listing: ListingCandidate, filters: SearchFilters) -> bool:
    for attr in _BOOLEAN_ATTRS:
        wanted = getattr(filters, attr)
        if wanted is not None and getattr(listing, attr) != wanted:
            return False
    for attr in _CATEGORICAL_ATTRS:
        wanted = getattr(filters, attr)
        if wanted is not None and getattr(listing, attr) != wanted.value:
            return False
    return True


def apply_amenity_filters(
    listings: list[ListingCandidate], filters: SearchFilters
) -> list[ListingCandidate]:
    return [l for l in listings if matches_filters(l, filters)]
