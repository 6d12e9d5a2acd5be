import ipaddress
from datetime import date, datetime
from typing import Annotated
from zoneinfo import ZoneInfo

from fastapi import Depends, Request

from stay_search.config import Settings
from stay_search.exceptions.custom import SearchValidationError
from stay_search.services.locations import LocationService
from stay_search.services.rate_limiter import RateLimiter
from stay_search.services.search import SearchService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


def get_location_service(request: Request) -> LocationService:
    return request.app.state.location_service


def get_rate_limiter(request: Request) -> RateLimiter:
    return request.app.state.rate_limiter


def get_today(settings: Annotated[Settings, Depends(get_settings)]) -> date:
    return datetime.now(ZoneInfo(settings.timezone)).date()


def get_client_ip(request: Request) -> str:
    host = request.client.host if request.client else ""
    try:
        return str(ipaddress.ip_address(host))
    except ValueError:
        raise SearchValidationError("sourceIp", "Invalid request source") from None


def get_is_authenticated(request: Request) -> bool:
    # Token verification happens upstream; only the scheme is checked here.
    auth = request.headers.get("authorization", "")
    return auth.startswith("Bearer ")


SettingsDep = Annotated[Settings, Depends(get_settings)]
SearchServiceDep = Annotated[SearchService, Depends(get_search_service)]
LocationServiceDep = Annotated[LocationService, Depends(get_location_service)]
RateLimiterDep = Annotated[RateLimiter, Depends(get_rate_limiter)]
TodayDep = Annotated[date, Depends(get_today)]
ClientIpDep = Annotated[str, Depends(get_client_ip)]
AuthenticatedDep = Annotated[bool, Depends(get_is_authenticated)]
