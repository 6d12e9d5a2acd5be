import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from redis.asyncio import Redis

from stay_search.config import Settings
from stay_search.exceptions.custom import DataStoreError, SearchError
from stay_search.exceptions.handlers import (
    data_store_error_handler,
    http_client_error_handler,
    search_error_handler,
    unhandled_error_handler,
)
from stay_search.routers.locations import router as locations_router
from stay_search.routers.search import router as search_router
from stay_search.services.availability import AvailabilityChecker, AvailabilityService
from stay_search.services.listing_index import ListingIndexService
from stay_search.services.locations import LocationService
from stay_search.services.pricing_store import PricingStoreService
from stay_search.services.rate_limiter import RateLimiter, RedisRateLimitStore
from stay_search.services.search import SearchService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    redis = Redis.from_url(settings.redis_url)
    async with httpx.AsyncClient(timeout=settings.http_timeout_seconds) as client:
        base_url = settings.data_api_url
        token = settings.data_api_token

        locations = LocationService(client, base_url, token)
        availability = AvailabilityService(client, base_url, token)

        app.state.settings = settings
        app.state.location_service = locations
        app.state.rate_limiter = RateLimiter(RedisRateLimitStore(redis))
        app.state.search_service = SearchService(
            locations,
            ListingIndexService(client, base_url, token),
            AvailabilityChecker(availability, batch_size=settings.availability_batch_size),
            PricingStoreService(
                client, base_url, token, batch_size=settings.pricing_batch_size
            ),
            max_results=settings.max_results_limit,
            timeout_seconds=settings.search_timeout_seconds,
        )

        try:
            yield
        finally:
            await redis.aclose()


app = FastAPI(title="Stay Search", lifespan=lifespan)

app.add_exception_handler(SearchError, search_error_handler)
app.add_exception_handler(DataStoreError, data_store_error_handler)
app.add_exception_handler(httpx.HTTPError, http_client_error_handler)
app.add_exception_handler(Exception, unhandled_error_handler)

app.include_router(search_router)
app.include_router(locations_router)
