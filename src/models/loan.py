from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LoanTerms:
    loan_amount: Decimal
    rate: Decimal  # Annual, decimal fraction (0.025 for 2.5%)
    period: int | Decimal  # Years; fractional terms need a whole number of months (2.5 -> 30)


@dataclass(frozen=True)
class FeeSet:
    """Fees attached to a loan.

    Entries are already normalized: a fee that could not be read as a finite
    number is stored as None and skipped when summed.
    """
    principal_fees: tuple[Decimal | None, ...] = ()  # Once, financed with the principal
    period_fees: tuple[Decimal | None, ...] = ()  # Every payment, not financed


@dataclass(frozen=True)
class CalendarMonth:
    year: int
    month: int  # Zero-based: 0 = January


@dataclass(frozen=True)
class ScheduleEntry:
    down_payment: Decimal
    interest: Decimal
    fees_paid: Decimal
    remainder: Decimal  # Outstanding principal after this payment
    year: int
    month: int  # Zero-based


@dataclass(frozen=True)
class YearlySummary:
    year: int
    payments: int
    down_payment: Decimal
    interest: Decimal
    fees_paid: Decimal
    ending_remainder: Decimal

    @property
    def total_paid(self) -> Decimal:
        return self.down_payment + self.interest + self.fees_paid
