from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def to_decimal(value: float | int | Decimal) -> Decimal:
    # str() keeps 0.1 as 0.1 instead of its binary expansion
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> float:
    """Round half-up to cents for reporting."""
    return float(value.quantize(_CENT, rounding=ROUND_HALF_UP))
