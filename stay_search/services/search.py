import asyncio
import logging

from stay_search.exceptions.custom import (
    InternalError,
    LocationNotFoundError,
    PricingDataError,
)
from stay_search.mappers.listing_filters import apply_amenity_filters, apply_booking_term_filters
from stay_search.mappers.pricing import calculate_listing_price, night_dates
from stay_search.mappers.result_builder import build_search_response, build_search_result
from stay_search.schemas.responses import SearchResponse, SearchResult
from stay_search.schemas.search import SearchRequest
from stay_search.services.availability import AvailabilityChecker
from stay_search.services.listing_index import ListingIndexService
from stay_search.services.locations import LocationService
from stay_search.services.pricing_store import PricingStoreService

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(
        self,
        locations: LocationService,
        listing_index: ListingIndexService,
        availability: AvailabilityChecker,
        pricing_store: PricingStoreService,
        max_results: int = 100,
        timeout_seconds: float = 25.0,
    ):
        self._locations = locations
        self._listing_index = listing_index
        self._availability = availability
        self._pricing_store = pricing_store
        self._max_results = max_results
        self._timeout_seconds = timeout_seconds

    async def search(self, request: SearchRequest, is_authenticated: bool) -> SearchResponse:
        """Run the whole pipeline; a timeout cancels any lookups still in flight."""
        try:
            async with asyncio.timeout(self._timeout_seconds):
                return await self._run(request, is_authenticated)
        except TimeoutError:
            logger.error(
                "Search timed out after %.1fs for %s", self._timeout_seconds,
                request.location_identifier,
            )
            raise InternalError() from None

    async def resolve_location_id(self, request: SearchRequest) -> str:
        if not request.is_slug:
            return request.location_identifier

        location_id = await self._locations.resolve_slug(request.location_identifier)
        if location_id is None:
            raise LocationNotFoundError(request.location_identifier)
        logger.info("Resolved slug %r to location %s", request.location_identifier, location_id)
        return location_id

    async def _run(self, request: SearchRequest, is_authenticated: bool) -> SearchResponse:
        location_id = await self.resolve_location_id(request)
        logger.info(
            "Search location=%s dates=%s..%s guests=%d authenticated=%s",
            location_id, request.check_in, request.check_out,
            request.total_guests, is_authenticated,
        )

        page = await self._listing_index.query_listings(
            location_id,
            min_guests=request.total_guests,
            limit=self._max_results,
            start_key=request.cursor,
        )
        logger.info("Found %d candidate listings", len(page.items))

        candidates = apply_booking_term_filters(
            page.items, request.nights, request.days_until_check_in
        )
        logger.info("After booking terms filtering: %d listings", len(candidates))

        candidates = apply_amenity_filters(candidates, request.filters)
        logger.info("After amenity filtering: %d listings", len(candidates))

        nights = night_dates(request.check_in, request.check_out)
        available = await self._availability.filter_available(candidates, nights[0], nights[-1])
        logger.info("Available listings: %d", len(available))

        matrices = await self._pricing_store.fetch_matrices(available)

        results: list[SearchResult] = []
        for listing in available:
            matrix = matrices.get(listing.listing_id)
            if matrix is None:
                continue
            try:
                pricing = calculate_listing_price(
                    matrix, nights, is_authenticated, request.adults, request.child_ages
                )
            except PricingDataError as exc:
                logger.error("Corrupt pricing data for %s: %s", listing.listing_id, exc.message)
                continue
            results.append(build_search_result(listing, pricing))

        logger.info("Final results: %d listings", len(results))
        return build_search_response(request, location_id, results, page.last_evaluated_key)
