"""Norwegian-style display strings for payment amounts and rates.

The engine only returns numbers; everything user-facing goes through here.
"""

from decimal import Decimal, ROUND_HALF_UP

from src.config import settings

NBSP = "\xa0"


def _localize(value: Decimal | float | int, decimals: int) -> str:
    """Group thousands with a no-break space and use a decimal comma."""
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(str(value)).quantize(quantum, ROUND_HALF_UP)
    text = f"{rounded:,.{decimals}f}"
    return text.replace(",", NBSP).replace(".", ",")


def to_money(value: Decimal | float | int, decimals: int = 0) -> str:
    """9287 -> '9 287 kr'"""
    return f"{_localize(value, decimals)}{NBSP}{settings.currency_suffix}"


def to_percentage(rate: Decimal | float | int, decimals: int = 2) -> str:
    """0.5 -> '50,00 %'"""
    return f"{_localize(Decimal(str(rate)) * 100, decimals)}{NBSP}%"
