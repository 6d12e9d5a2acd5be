from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from stay_search.schemas.base import CamelModel
from stay_search.schemas.listing import CheckInType, ParkingType, PropertyType


class SearchFilters(CamelModel):
    pets_allowed: bool | None = None
    has_wifi: bool | None = Field(default=None, alias="hasWIFI")
    has_air_conditioning: bool | None = None
    has_parking: bool | None = None
    has_gym: bool | None = None
    has_pool: bool | None = None
    has_workspace: bool | None = None
    instant_book: bool | None = None
    parking_type: ParkingType | None = None
    check_in_type: CheckInType | None = None
    property_type: PropertyType | None = None


class SearchRequest(BaseModel):
    location_identifier: str
    is_slug: bool
    check_in: date
    check_out: date
    adults: int
    child_ages: list[int] = []
    total_guests: int
    nights: int
    days_until_check_in: int
    filters: SearchFilters = SearchFilters()
    cursor: dict[str, Any] | None = None
