"""Price a stay against a listing's pricing matrix.

Everything here is a pure function of its inputs; the same matrix and
nights always produce the same ListingPricing.
"""

from datetime import date, timedelta
from decimal import Decimal

from stay_search.exceptions.custom import PricingDataError
from stay_search.mappers.money import round_money, to_decimal
from stay_search.mappers.tourist_tax import calculate_tourist_tax
from stay_search.schemas.pricing import (
    BasePrice,
    DiscountType,
    LengthOfStayDiscount,
    PricingMatrix,
)
from stay_search.schemas.responses import (
    AppliedLengthOfStayDiscount,
    ListingPricing,
    NightlyPrice,
)

_HUNDRED = Decimal(100)


def night_dates(check_in: date, check_out: date) -> list[date]:
    """Each night of the stay: check-in up to, not including, check-out."""
    return [check_in + timedelta(days=i) for i in range((check_out - check_in).days)]


def resolve_base_price(base_prices: list[BasePrice], day: date) -> BasePrice:
    """First seasonal price covering ``day`` in declaration order, else the default."""
    for base_price in base_prices:
        if not base_price.is_default and base_price.date_range is not None:
            if base_price.date_range.contains(day):
                return base_price

    for base_price in base_prices:
        if base_price.is_default:
            return base_price
    raise PricingDataError(None, "No default base price found")


def find_length_of_stay_discount(
    base_prices: list[BasePrice], nights: int
) -> LengthOfStayDiscount | None:
    """Qualifying discount with the highest min_nights across every base price.

    Equal thresholds keep the one declared first.
    """
    best: LengthOfStayDiscount | None = None
    for base_price in base_prices:
        for discount in base_price.length_of_stay_pricing:
            if discount.min_nights > nights:
                continue
            if best is None or discount.min_nights > best.min_nights:
                best = discount
    return best


def _apply_discount(price: Decimal, discount: LengthOfStayDiscount | None) -> Decimal:
    if discount is None:
        return price
    value = to_decimal(discount.discount_value)
    if discount.discount_type == DiscountType.percentage:
        return price - price * value / _HUNDRED
    return max(price - value, Decimal(0))


def calculate_listing_price(
    matrix: PricingMatrix,
    nights: list[date],
    is_authenticated: bool,
    adults: int,
    child_ages: list[int],
) -> ListingPricing:
    if not nights:
        raise ValueError("A stay needs at least one night")

    try:
        resolved = [(day, resolve_base_price(matrix.base_prices, day)) for day in nights]
    except PricingDataError as exc:
        raise PricingDataError(matrix.listing_id, exc.message) from None

    discount = find_length_of_stay_discount(matrix.base_prices, len(nights))

    total = Decimal(0)
    savings = Decimal(0)
    any_members_price = False
    breakdown: list[NightlyPrice] = []

    for day, base_price in resolved:
        use_members_price = is_authenticated and base_price.members_discount is not None
        if use_members_price:
            nightly = to_decimal(base_price.members_discount.calculated_price)
            any_members_price = True
        else:
            nightly = to_decimal(base_price.standard_price)

        final = _apply_discount(nightly, discount)
        total += final
        savings += nightly - final

        breakdown.append(
            NightlyPrice(
                date=day,
                base_price=round_money(nightly),
                final_price=round_money(final),
                is_members_price=use_members_price,
                is_seasonal_price=not base_price.is_default,
            )
        )

    applied = None
    if discount is not None:
        applied = AppliedLengthOfStayDiscount(
            min_nights=discount.min_nights,
            discount_type=discount.discount_type,
            discount_value=discount.discount_value,
            total_savings=round_money(savings),
        )

    pricing = ListingPricing(
        currency=matrix.currency,
        total_price=round_money(total),
        price_per_night=round_money(total / len(nights)),
        breakdown=breakdown,
        length_of_stay_discount=applied,
        members_pricing_applied=is_authenticated and any_members_price,
    )

    if matrix.taxes_included_in_price:
        pricing.taxes_included_in_price = True
        return pricing

    tax = calculate_tourist_tax(matrix.tourist_tax, adults, child_ages, len(nights))
    pricing.total_price_with_tax = round_money(total + to_decimal(tax.tourist_tax_amount))
    pricing.tourist_tax_amount = tax.tourist_tax_amount
    pricing.tourist_tax_breakdown = tax.tourist_tax_breakdown
    return pricing
