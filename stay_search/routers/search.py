import logging

from fastapi import APIRouter, Request

from stay_search.dependencies import (
    AuthenticatedDep,
    ClientIpDep,
    RateLimiterDep,
    SearchServiceDep,
    SettingsDep,
    TodayDep,
)
from stay_search.exceptions.custom import RateLimitExceededError
from stay_search.mappers.search_request import parse_search_request
from stay_search.schemas.responses import ErrorResponse, SearchResponse

logger = logging.getLogger(__name__)

router = APIRouter()

RATE_LIMIT_ENDPOINT = "listing-search"


@router.get(
    "/listings/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def search_listings(
    request: Request,
    service: SearchServiceDep,
    limiter: RateLimiterDep,
    settings: SettingsDep,
    today: TodayDep,
    client_ip: ClientIpDep,
    is_authenticated: AuthenticatedDep,
) -> SearchResponse:
    if not await limiter.is_allowed(RATE_LIMIT_ENDPOINT, client_ip, settings.search_rate_limit):
        raise RateLimitExceededError(RATE_LIMIT_ENDPOINT)

    search_request = parse_search_request(request.query_params, today)
    return await service.search(search_request, is_authenticated)
