"""Loan payment, effective rate and schedule routes."""

import logging
from datetime import date

from fastapi import APIRouter, Depends, HTTPException

from src.api.deps import get_today
from src.api.schemas import (
    LoanRequest,
    ScheduleRequest,
    EffectiveRateRequest,
    LTVRequest,
    PaymentResponse,
    EffectiveRateResponse,
    ScheduleEntryResponse,
    YearlySummaryResponse,
    ScheduleResponse,
    LTVResponse,
)
from src.engine.conversions import ltv_ratio
from src.engine.debt import (
    monthly_payment,
    monthly_payment_with_fees,
    payment_schedule,
    yearly_schedule_summary,
)
from src.engine.effective_rate import EffectiveRateConvergenceError, solve_effective_rate
from src.engine.fees import sum_fees
from src.models.loan import FeeSet, LoanTerms

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/loans", tags=["loans"])


def _terms(req: LoanRequest) -> LoanTerms:
    return LoanTerms(loan_amount=req.loan_amount, rate=req.rate, period=req.period)


def _fees(req: LoanRequest) -> FeeSet:
    # Fee lists were already coerced by the schema validator
    return FeeSet(principal_fees=tuple(req.principal_fees), period_fees=tuple(req.period_fees))


@router.post("/payment", response_model=PaymentResponse)
async def payment(req: LoanRequest):
    """Monthly payment with and without fees."""
    terms, fees = _terms(req), _fees(req)
    return PaymentResponse(
        monthly_payment=monthly_payment(terms),
        monthly_payment_with_fees=monthly_payment_with_fees(terms, fees),
        principal_fees_total=sum_fees(fees.principal_fees),
        period_fees_total=sum_fees(fees.period_fees),
    )


@router.post("/effective-rate", response_model=EffectiveRateResponse)
async def effective_rate(req: EffectiveRateRequest):
    """Effective annual rate implied by an advertised monthly payment."""
    try:
        rate = solve_effective_rate(req.loan_amount, req.monthly_payment, req.period)
    except EffectiveRateConvergenceError as e:
        logger.warning("Effective rate solver gave up: %s", e)
        raise HTTPException(status_code=422, detail=str(e))
    return EffectiveRateResponse(effective_rate=rate)


@router.post("/schedule", response_model=ScheduleResponse)
async def schedule(req: ScheduleRequest, today: date = Depends(get_today)):
    """Full month-by-month repayment plan plus a per-year rollup."""
    terms, fees = _terms(req), _fees(req)
    start = req.start_date or today
    entries = payment_schedule(terms, fees, start_date=start)
    yearly = yearly_schedule_summary(entries)

    return ScheduleResponse(
        start_date=start,
        monthly_payment=monthly_payment(terms),
        entries=[
            ScheduleEntryResponse(
                year=e.year,
                month=e.month,
                down_payment=e.down_payment,
                interest=e.interest,
                fees_paid=e.fees_paid,
                remainder=e.remainder,
            )
            for e in entries
        ],
        yearly=[
            YearlySummaryResponse(
                year=y.year,
                payments=y.payments,
                down_payment=y.down_payment,
                interest=y.interest,
                fees_paid=y.fees_paid,
                total_paid=y.total_paid,
                ending_remainder=y.ending_remainder,
            )
            for y in yearly
        ],
    )


@router.post("/ltv", response_model=LTVResponse)
async def loan_to_value(req: LTVRequest):
    """Loan-to-value ratio of a loan against the purchase price."""
    return LTVResponse(ltv=ltv_ratio(req.loan_amount, req.purchase_price))
