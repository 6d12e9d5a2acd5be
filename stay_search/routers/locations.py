import logging

from fastapi import APIRouter

from stay_search.dependencies import (
    ClientIpDep,
    LocationServiceDep,
    RateLimiterDep,
    SettingsDep,
)
from stay_search.exceptions.custom import RateLimitExceededError, SearchValidationError
from stay_search.mappers.location_ranking import normalize_search_text, rank_locations
from stay_search.schemas.responses import ErrorResponse, LocationSearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_ENDPOINT = "location-search"
MIN_QUERY_LENGTH = 2
MAX_QUERY_LENGTH = 50


@router.get(
    "/locations/search",
    response_model=LocationSearchResponse,
    responses={400: {"model": ErrorResponse}, 429: {"model": ErrorResponse}},
)
async def search_locations(
    service: LocationServiceDep,
    limiter: RateLimiterDep,
    settings: SettingsDep,
    client_ip: ClientIpDep,
    q: str | None = None,
) -> LocationSearchResponse:
    if not await limiter.is_allowed(
        RATE_LIMIT_ENDPOINT, client_ip, settings.location_search_rate_limit
    ):
        raise RateLimitExceededError(RATE_LIMIT_ENDPOINT)

    query = (q or "").strip()
    if not query:
        raise SearchValidationError("q", 'Query parameter "q" is required')
    if len(query) < MIN_QUERY_LENGTH:
        raise SearchValidationError("q", f"Query must be at least {MIN_QUERY_LENGTH} characters")
    if len(query) > MAX_QUERY_LENGTH:
        raise SearchValidationError("q", f"Query must be at most {MAX_QUERY_LENGTH} characters")

    normalized = normalize_search_text(query)
    variants = await service.search_by_prefix(normalized)
    logger.info("Found %d location variant(s) matching %r", len(variants), query)
    return LocationSearchResponse(locations=rank_locations(variants, normalized))
