"""CLI for loan payments, effective interest and repayment plans.

Usage:
    python -m src.cli payment 2100000 0.0197 25 --principal-fee 2000 --principal-fee 1000 --period-fee 100
    python -m src.cli effective-rate 17000 518 5
    python -m src.cli schedule 4000000 0.025 25 --start 2025-01 --yearly
"""

import argparse
import logging
import sys
from datetime import date
from decimal import Decimal, InvalidOperation

from src.config import settings
from src.engine.debt import (
    monthly_payment,
    monthly_payment_with_fees,
    payment_schedule,
    yearly_schedule_summary,
)
from src.engine.effective_rate import EffectiveRateConvergenceError, solve_effective_rate
from src.engine.fees import fee_set, sum_fees
from src.formatting import to_money, to_percentage
from src.models.loan import FeeSet, LoanTerms, ScheduleEntry, YearlySummary

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _decimal(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}")


def _year_month(value: str) -> date:
    try:
        year, month = value.split("-")[:2]
        return date(int(year), int(month), 1)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected YYYY-MM, got {value!r}")


def _header(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}")


# ── Report sections ──────────────────────────────────────────────────────────

def print_payment(terms: LoanTerms, fees: FeeSet) -> None:
    _header("Monthly Payment")
    print(f"  Loan amount:        {to_money(terms.loan_amount)}")
    print(f"  Rate:               {to_percentage(terms.rate)}")
    print(f"  Term:               {terms.period} years")
    print(f"  Principal fees:     {to_money(sum_fees(fees.principal_fees))}")
    print(f"  Monthly fees:       {to_money(sum_fees(fees.period_fees), 2)}")
    print()
    print(f"  Payment:            {to_money(monthly_payment(terms), 2)}")
    print(f"  Payment with fees:  {to_money(monthly_payment_with_fees(terms, fees), 2)}")
    print()


def print_schedule(entries: list[ScheduleEntry]) -> None:
    _header("Repayment Plan")
    print(f"  {'Month':<10}{'Principal':>14}{'Interest':>12}{'Fees':>10}{'Remaining':>16}")
    for e in entries:
        label = f"{MONTH_NAMES[e.month]} {e.year}"
        print(
            f"  {label:<10}{to_money(e.down_payment):>14}{to_money(e.interest):>12}"
            f"{to_money(e.fees_paid):>10}{to_money(e.remainder):>16}"
        )
    print()


def print_yearly(yearly: list[YearlySummary]) -> None:
    _header("Repayment Plan by Year")
    print(f"  {'Year':<6}{'Principal':>14}{'Interest':>14}{'Fees':>10}{'Remaining':>16}")
    for y in yearly:
        print(
            f"  {y.year:<6}{to_money(y.down_payment):>14}{to_money(y.interest):>14}"
            f"{to_money(y.fees_paid):>10}{to_money(y.ending_remainder):>16}"
        )
    print()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Loan amortization calculator")
    sub = parser.add_subparsers(dest="command", required=True)

    def add_loan_args(p: argparse.ArgumentParser) -> None:
        p.add_argument("loan_amount", type=_decimal, help="Amount borrowed")
        p.add_argument("rate", type=_decimal, help="Annual rate as a fraction, e.g. 0.025")
        p.add_argument("period", type=int, help="Term in years")
        p.add_argument("--principal-fee", action="append", default=[], help="One-time fee (repeatable)")
        p.add_argument("--period-fee", action="append", default=[], help="Monthly fee (repeatable)")

    add_loan_args(sub.add_parser("payment", help="Monthly payment"))

    schedule = sub.add_parser("schedule", help="Month-by-month repayment plan")
    add_loan_args(schedule)
    schedule.add_argument("--start", type=_year_month, help="Start month YYYY-MM (default: this month)")
    schedule.add_argument("--yearly", action="store_true", help="Summarize per calendar year")

    effective = sub.add_parser("effective-rate", help="Effective rate from a known payment")
    effective.add_argument("loan_amount", type=_decimal)
    effective.add_argument("monthly_payment", type=_decimal)
    effective.add_argument("period", type=int, help="Term in years")

    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper())

    if args.command == "effective-rate":
        try:
            rate = solve_effective_rate(args.loan_amount, args.monthly_payment, args.period)
        except EffectiveRateConvergenceError as e:
            print(f"error: {e}", file=sys.stderr)
            return 1
        _header("Effective Interest")
        print(f"  Loan amount:      {to_money(args.loan_amount)}")
        print(f"  Monthly payment:  {to_money(args.monthly_payment, 2)}")
        print(f"  Term:             {args.period} years")
        print(f"  Effective rate:   {to_percentage(rate)}")
        print()
        return 0

    if args.loan_amount <= 0 or not 0 < args.rate < 1 or args.period <= 0:
        parser.error("loan_amount and period must be positive and rate between 0 and 1")

    terms = LoanTerms(loan_amount=args.loan_amount, rate=args.rate, period=args.period)
    fees = fee_set(args.principal_fee, args.period_fee)

    if args.command == "payment":
        print_payment(terms, fees)
        return 0

    entries = payment_schedule(terms, fees, start_date=args.start)
    if args.yearly:
        print_yearly(yearly_schedule_summary(entries))
    else:
        print_schedule(entries)
    return 0


if __name__ == "__main__":
    sys.exit(main())
