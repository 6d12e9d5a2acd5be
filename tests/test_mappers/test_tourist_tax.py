"""Tests for tourist tax calculation."""

from stay_search.mappers.tourist_tax import calculate_tourist_tax
from stay_search.schemas.pricing import TouristTaxConfig


def _config(adult_amount=1.5, child_rates=None) -> TouristTaxConfig:
    if child_rates is None:
        child_rates = [
            {
                "childRateId": "cr-young",
                "ageFrom": 0,
                "ageTo": 6,
                "amount": 0.0,
                "displayLabel": {"en": "Children 0-6", "sr": "Deca 0-6"},
            },
            {
                "childRateId": "cr-teen",
                "ageFrom": 7,
                "ageTo": 12,
                "amount": 0.75,
                "displayLabel": {"en": "Children 7-12", "sr": "Deca 7-12"},
            },
        ]
    return TouristTaxConfig(adultAmount=adult_amount, childRates=child_rates)


def test_no_config_is_zero():
    result = calculate_tourist_tax(None, adults=2, child_ages=[5], nights=3)

    assert result.tourist_tax_amount == 0
    assert result.tourist_tax_breakdown.adults.count == 2
    assert result.tourist_tax_breakdown.adults.per_night == 0
    assert result.tourist_tax_breakdown.adults.total == 0
    assert result.tourist_tax_breakdown.children == []


def test_adults_only():
    result = calculate_tourist_tax(_config(adult_amount=1.5), adults=3, child_ages=[], nights=4)

    assert result.tourist_tax_amount == 18.0
    assert result.tourist_tax_breakdown.adults.total == 18.0
    assert result.tourist_tax_breakdown.adults.per_night == 1.5


def test_children_grouped_by_band():
    result = calculate_tourist_tax(_config(), adults=2, child_ages=[8, 3, 10], nights=2)

    children = result.tourist_tax_breakdown.children
    # first match order: the 7-12 band was hit first
    assert [(c.age_from, c.count) for c in children] == [(7, 2), (0, 1)]
    assert children[0].total == 3.0
    assert children[0].per_night == 0.75
    assert children[0].display_label.sr == "Deca 7-12"
    assert children[1].total == 0.0
    assert result.tourist_tax_amount == 2 * 1.5 * 2 + 3.0


def test_unmatched_age_contributes_nothing():
    with_teen = calculate_tourist_tax(_config(), adults=1, child_ages=[15], nights=3)
    without = calculate_tourist_tax(_config(), adults=1, child_ages=[], nights=3)

    assert with_teen.tourist_tax_amount == without.tourist_tax_amount == 4.5
    assert with_teen.tourist_tax_breakdown.children == []


def test_overlapping_bands_first_wins():
    rates = [
        {"ageFrom": 0, "ageTo": 10, "amount": 1.0},
        {"ageFrom": 5, "ageTo": 17, "amount": 2.0},
    ]
    result = calculate_tourist_tax(_config(adult_amount=0, child_rates=rates), 1, [7], 1)
    assert result.tourist_tax_amount == 1.0


def test_totals_rounded_half_up():
    result = calculate_tourist_tax(_config(adult_amount=0.335), adults=1, child_ages=[], nights=1)
    assert result.tourist_tax_amount == 0.34
