from decimal import Decimal

from stay_search.mappers.money import round_money, to_decimal
from stay_search.schemas.pricing import ChildRate, TouristTaxConfig
from stay_search.schemas.responses import (
    AdultTax,
    ChildTaxGroup,
    TouristTaxBreakdown,
    TouristTaxCalculation,
)


def find_child_rate(rates: list[ChildRate], age: int) -> int | None:
    """Index of the first band covering ``age``, or None."""
    for index, rate in enumerate(rates):
        if rate.age_from <= age <= rate.age_to:
            return index
    return None


def calculate_tourist_tax(
    config: TouristTaxConfig | None,
    adults: int,
    child_ages: list[int],
    nights: int,
) -> TouristTaxCalculation:
    """Per-guest, per-night tourist tax for a stay.

    Children whose age falls in no band are not taxed. Children are grouped
    by the band they matched, in order of first match.
    """
    if config is None:
        return TouristTaxCalculation(
            tourist_tax_amount=0.0,
            tourist_tax_breakdown=TouristTaxBreakdown(
                adults=AdultTax(count=adults, per_night=0.0, total=0.0),
                children=[],
            ),
        )

    adult_tax = adults * to_decimal(config.adult_amount) * nights

    group_counts: dict[int, int] = {}
    for age in child_ages:
        index = find_child_rate(config.child_rates, age)
        if index is not None:
            group_counts[index] = group_counts.get(index, 0) + 1

    children: list[ChildTaxGroup] = []
    child_tax = Decimal(0)
    for index, count in group_counts.items():
        rate = config.child_rates[index]
        group_tax = count * to_decimal(rate.amount) * nights
        child_tax += group_tax
        children.append(
            ChildTaxGroup(
                count=count,
                age_from=rate.age_from,
                age_to=rate.age_to,
                per_night=rate.amount,
                total=round_money(group_tax),
                display_label=rate.display_label,
            )
        )

    return TouristTaxCalculation(
        tourist_tax_amount=round_money(adult_tax + child_tax),
        tourist_tax_breakdown=TouristTaxBreakdown(
            adults=AdultTax(
                count=adults,
                per_night=config.adult_amount,
                total=round_money(adult_tax),
            ),
            children=children,
        ),
    )
