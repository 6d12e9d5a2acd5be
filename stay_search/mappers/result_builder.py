from typing import Any

from stay_search.mappers.cursor import encode_cursor
from stay_search.schemas.listing import ListingCandidate
from stay_search.schemas.responses import (
    Capacity,
    Coordinates,
    ListingPricing,
    Pagination,
    SearchMeta,
    SearchResponse,
    SearchResult,
)
from stay_search.schemas.search import SearchRequest


def build_search_result(listing: ListingCandidate, pricing: ListingPricing) -> SearchResult:
    return SearchResult(
        listing_id=listing.listing_id,
        host_id=listing.host_id,
        name=listing.name,
        short_description=listing.short_description,
        thumbnail_url=listing.thumbnail_url,
        place_name=listing.place_name,
        region_name=listing.region_name,
        coordinates=Coordinates(latitude=listing.latitude, longitude=listing.longitude),
        capacity=Capacity(
            max_guests=listing.max_guests,
            bedrooms=listing.bedrooms,
            single_beds=listing.single_beds,
            double_beds=listing.double_beds,
            bathrooms=listing.bathrooms,
        ),
        pets_allowed=listing.pets_allowed,
        has_wifi=listing.has_wifi,
        has_air_conditioning=listing.has_air_conditioning,
        has_parking=listing.has_parking,
        has_gym=listing.has_gym,
        has_pool=listing.has_pool,
        has_workspace=listing.has_workspace,
        parking_type=listing.parking_type,
        check_in_type=listing.check_in_type,
        property_type=listing.property_type,
        instant_book=listing.instant_book,
        host_verified=listing.host_verified,
        listing_verified=listing.listing_verified,
        official_star_rating=listing.official_star_rating,
        pricing=pricing,
    )


def build_search_response(
    request: SearchRequest,
    location_id: str,
    results: list[SearchResult],
    last_evaluated_key: dict[str, Any] | None,
) -> SearchResponse:
    return SearchResponse(
        listings=results,
        pagination=Pagination(
            has_more=bool(last_evaluated_key),
            next_cursor=encode_cursor(last_evaluated_key) if last_evaluated_key else None,
            total_returned=len(results),
        ),
        search_meta=SearchMeta(
            location_id=location_id,
            check_in=request.check_in,
            check_out=request.check_out,
            nights=request.nights,
            adults=request.adults,
            children=len(request.child_ages),
            total_guests=request.total_guests,
        ),
    )
