import datetime as dt
from typing import Any

from pydantic import Field, SerializerFunctionWrapHandler, model_serializer

from stay_search.schemas.base import BilingualText, CamelModel
from stay_search.schemas.pricing import DiscountType


class NightlyPrice(CamelModel):
    date: dt.date
    base_price: float
    final_price: float
    is_members_price: bool
    is_seasonal_price: bool


class AppliedLengthOfStayDiscount(CamelModel):
    applied: bool = True
    min_nights: int
    discount_type: DiscountType
    discount_value: float
    total_savings: float


class AdultTax(CamelModel):
    count: int
    per_night: float
    total: float


class ChildTaxGroup(CamelModel):
    count: int
    age_from: int
    age_to: int
    per_night: float
    total: float
    display_label: BilingualText


class TouristTaxBreakdown(CamelModel):
    adults: AdultTax
    children: list[ChildTaxGroup] = []


class TouristTaxCalculation(CamelModel):
    tourist_tax_amount: float
    tourist_tax_breakdown: TouristTaxBreakdown


_TAX_FIELDS = {
    "total_price_with_tax", "totalPriceWithTax",
    "tourist_tax_amount", "touristTaxAmount",
    "tourist_tax_breakdown", "touristTaxBreakdown",
    "taxes_included_in_price", "taxesIncludedInPrice",
}


class ListingPricing(CamelModel):
    currency: str
    total_price: float  # without tourist tax
    price_per_night: float
    breakdown: list[NightlyPrice]
    length_of_stay_discount: AppliedLengthOfStayDiscount | None = None
    members_pricing_applied: bool = False

    # taxes_included_in_price = false
    total_price_with_tax: float | None = None
    tourist_tax_amount: float | None = None
    tourist_tax_breakdown: TouristTaxBreakdown | None = None

    # taxes_included_in_price = true
    taxes_included_in_price: bool | None = None

    @model_serializer(mode="wrap")
    def _omit_unused_tax_fields(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        data = handler(self)
        for key in list(data):
            if key in _TAX_FIELDS and data[key] is None:
                del data[key]
        return data


class Coordinates(CamelModel):
    latitude: float | None = None
    longitude: float | None = None


class Capacity(CamelModel):
    max_guests: int
    bedrooms: int
    single_beds: int
    double_beds: int
    bathrooms: int


class SearchResult(CamelModel):
    listing_id: str
    host_id: str
    name: str
    short_description: BilingualText
    thumbnail_url: str | None = None
    place_name: str | None = None
    region_name: str | None = None
    coordinates: Coordinates
    capacity: Capacity
    pets_allowed: bool
    has_wifi: bool = Field(alias="hasWIFI")
    has_air_conditioning: bool
    has_parking: bool
    has_gym: bool
    has_pool: bool
    has_workspace: bool
    parking_type: str | None = None
    check_in_type: str | None = None
    property_type: str | None = None
    instant_book: bool
    host_verified: bool
    listing_verified: bool
    official_star_rating: int | None = None
    pricing: ListingPricing


class Pagination(CamelModel):
    has_more: bool
    next_cursor: str | None = None
    total_returned: int


class SearchMeta(CamelModel):
    location_id: str
    check_in: dt.date
    check_out: dt.date
    nights: int
    adults: int
    children: int
    total_guests: int


class SearchResponse(CamelModel):
    listings: list[SearchResult]
    pagination: Pagination
    search_meta: SearchMeta


class ErrorResponse(CamelModel):
    error: str
    code: str


class LocationSummary(CamelModel):
    location_id: str
    name: str


class LocationSearchResponse(CamelModel):
    locations: list[LocationSummary]
