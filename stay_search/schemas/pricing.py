from datetime import date
from enum import StrEnum

from pydantic import Field, model_validator

from stay_search.schemas.base import BilingualText, CamelModel


class DiscountType(StrEnum):
    percentage = "PERCENTAGE"
    absolute = "ABSOLUTE"


class DateRange(CamelModel):
    start_date: date
    end_date: date

    def contains(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


class MembersDiscount(CamelModel):
    type: DiscountType
    input_value: float | None = None
    calculated_price: float
    calculated_percentage: float | None = None


class LengthOfStayDiscount(CamelModel):
    min_nights: int
    discount_type: DiscountType
    discount_value: float = Field(ge=0)

    @model_validator(mode="after")
    def _check_percentage(self) -> "LengthOfStayDiscount":
        if self.discount_type == DiscountType.percentage and self.discount_value > 100:
            raise ValueError("percentage discount cannot exceed 100")
        return self


class BasePrice(CamelModel):
    base_price_id: str | None = None
    is_default: bool = False
    date_range: DateRange | None = None
    standard_price: float
    members_discount: MembersDiscount | None = None
    length_of_stay_pricing: list[LengthOfStayDiscount] = []


class ChildRate(CamelModel):
    child_rate_id: str | None = None
    age_from: int
    age_to: int
    amount: float
    display_label: BilingualText = BilingualText()


class TouristTaxConfig(CamelModel):
    adult_amount: float
    child_rates: list[ChildRate] = []


class PricingMatrix(CamelModel):
    listing_id: str | None = None
    currency: str
    base_prices: list[BasePrice]
    tourist_tax: TouristTaxConfig | None = None
    taxes_included_in_price: bool = False
