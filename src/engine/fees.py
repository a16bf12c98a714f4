"""Fee normalization and summation.

Fee sources are loosely typed (form fields, JSON, spreadsheets). Values are
coerced once at the boundary; the engine only ever sums Decimal | None.
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from src.models.loan import FeeSet

# Leading numeric prefix, the way a lenient parseFloat reads "1000 kr"
_NUMERIC_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def coerce_fee(value: Any) -> Decimal | None:
    """Read a single fee as a finite Decimal, or None if it isn't a number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value if value.is_finite() else None
    if isinstance(value, (int, float)):
        fee = Decimal(str(value))
        return fee if fee.is_finite() else None
    if isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match is None:
            return None
        try:
            fee = Decimal(match.group(1))
        except InvalidOperation:
            return None
        return fee if fee.is_finite() else None
    return None


def normalize_fees(values: Iterable[Any] | None) -> tuple[Decimal | None, ...]:
    if values is None:
        return ()
    return tuple(coerce_fee(v) for v in values)


def fee_set(
    principal_fees: Iterable[Any] | None = None,
    period_fees: Iterable[Any] | None = None,
) -> FeeSet:
    """Build a FeeSet from raw, possibly dirty fee lists."""
    return FeeSet(
        principal_fees=normalize_fees(principal_fees),
        period_fees=normalize_fees(period_fees),
    )


def sum_fees(fees: Iterable[Decimal | None]) -> Decimal:
    """Sum fees, skipping absent entries."""
    return sum((f for f in fees if f is not None), Decimal("0"))
