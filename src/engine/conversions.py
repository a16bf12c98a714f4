"""Rate and ratio conversions used alongside the payment engine."""

from decimal import Decimal, ROUND_HALF_UP

FOUR_PLACES = Decimal("0.0001")
HUNDRED = Decimal("100")


def _clean(value: Decimal) -> Decimal:
    # 3.50 -> 3.5, but keep 100 as 100 rather than 1E+2
    normalized = value.normalize()
    return normalized.quantize(Decimal("1")) if normalized == normalized.to_integral_value() else normalized


def ltv_ratio(loan_amount: Decimal, purchase_price: Decimal) -> Decimal:
    """Loan-to-value ratio. A zero purchase price counts as fully leveraged."""
    if purchase_price == 0:
        return Decimal("1")
    return (loan_amount / purchase_price).quantize(FOUR_PLACES, ROUND_HALF_UP)


def percentage_to_rate(percentage: Decimal | int | float | str) -> Decimal:
    """3.5 -> 0.035"""
    return _clean(Decimal(str(percentage)) / HUNDRED)


def rate_to_percentage(rate: Decimal | int | float | str) -> Decimal:
    """0.035 -> 3.5"""
    return _clean(Decimal(str(rate)) * HUNDRED)
