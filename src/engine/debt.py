"""Amortization payments and month-by-month repayment schedules.

Pure functions: Decimal in, dataclass out. No I/O.
"""

from collections.abc import Callable
from contextlib import contextmanager
from datetime import date
from decimal import (
    Decimal,
    DivisionByZero,
    InvalidOperation,
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_HALF_UP,
    localcontext,
)

from src.engine.dates import date_at_offset
from src.engine.fees import sum_fees
from src.models.loan import FeeSet, LoanTerms, ScheduleEntry, YearlySummary

TWO_PLACES = Decimal("0.01")
MONTHS_PER_YEAR = 12


@contextmanager
def _non_finite_passthrough():
    """Let 0/0 and x/0 produce NaN and Infinity instead of raising."""
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        ctx.traps[DivisionByZero] = False
        yield


def monthly_payment(terms: LoanTerms) -> Decimal:
    """Calculate the fixed monthly payment that amortizes the loan.

    No validation: a zero rate yields NaN (0/0) and a zero period Infinity.
    Callers check rate > 0 and period > 0 before getting here.
    """
    with _non_finite_passthrough():
        r = terms.rate / MONTHS_PER_YEAR
        n = terms.period * MONTHS_PER_YEAR
        # M = P * [r(1+r)^n] / [(1+r)^n - 1]
        factor = (1 + r) ** n
        payment = terms.loan_amount * (r * factor) / (factor - 1)
        if not payment.is_finite():
            return payment
        return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def monthly_payment_with_fees(terms: LoanTerms, fees: FeeSet | None = None) -> Decimal:
    """Monthly payment with principal fees financed and period fees added flat."""
    fees = fees or FeeSet()
    financed = LoanTerms(
        loan_amount=terms.loan_amount + sum_fees(fees.principal_fees),
        rate=terms.rate,
        period=terms.period,
    )
    return monthly_payment(financed) + sum_fees(fees.period_fees)


def payment_schedule(
    terms: LoanTerms,
    fees: FeeSet | None = None,
    start_date: date | None = None,
    today: Callable[[], date] = date.today,
) -> list[ScheduleEntry]:
    """Generate the repayment plan, one entry per month.

    Interest is floored and the principal part is ceiled and capped at what
    remains, so the remainder reaches zero on the final payment.

    Args:
        terms: Loan amount, annual rate and term in years
        fees: Principal fees are charged with the first payment, period fees
            with every payment
        start_date: Month the loan starts; the first payment falls in the
            following month
        today: Clock used when no start_date is given
    """
    fees = fees or FeeSet()
    start = start_date or today()

    base_payment = monthly_payment(terms)
    principal_fees = sum_fees(fees.principal_fees)
    period_fees = sum_fees(fees.period_fees)
    n_periods = int(terms.period * MONTHS_PER_YEAR)

    entries: list[ScheduleEntry] = []
    remainder = terms.loan_amount

    # A NaN payment (zero rate) carries through as NaN entries
    with _non_finite_passthrough():
        for i in range(1, n_periods + 1):
            interest = (remainder * terms.rate / MONTHS_PER_YEAR).to_integral_value(ROUND_FLOOR)
            down_payment = min(base_payment - interest, remainder).to_integral_value(ROUND_CEILING)
            remainder -= down_payment

            fees_paid = period_fees + (principal_fees if i == 1 else Decimal("0"))
            position = date_at_offset(i, start)

            entries.append(ScheduleEntry(
                down_payment=down_payment,
                interest=interest,
                fees_paid=fees_paid,
                remainder=remainder,
                year=position.year,
                month=position.month,
            ))

    return entries


def yearly_schedule_summary(entries: list[ScheduleEntry]) -> list[YearlySummary]:
    """Aggregate a payment schedule by calendar year."""
    yearly: list[YearlySummary] = []
    current: list[ScheduleEntry] = []

    def close_year() -> None:
        yearly.append(YearlySummary(
            year=current[0].year,
            payments=len(current),
            down_payment=sum((e.down_payment for e in current), Decimal("0")),
            interest=sum((e.interest for e in current), Decimal("0")),
            fees_paid=sum((e.fees_paid for e in current), Decimal("0")),
            ending_remainder=current[-1].remainder,
        ))

    for entry in entries:
        if current and entry.year != current[0].year:
            close_year()
            current = []
        current.append(entry)

    if current:
        close_year()

    return yearly
