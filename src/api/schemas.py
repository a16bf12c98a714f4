"""Pydantic schemas for API request/response models."""

from datetime import date
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field, field_validator

from src.config import settings
from src.engine.fees import normalize_fees


# ---- Request schemas ----

class LoanRequest(BaseModel):
    loan_amount: Decimal = Field(..., gt=0, description="Amount borrowed")
    rate: Decimal = Field(..., gt=0, lt=1, description="Annual rate as a fraction, e.g. 0.025")
    period: int = Field(..., gt=0, le=settings.max_term_years, description="Term in years")

    # Loosely typed on purpose: "1000", 1000, null and "n/a" are all accepted
    principal_fees: list[Any] = Field(default_factory=list, description="One-time fees, financed")
    period_fees: list[Any] = Field(default_factory=list, description="Fees charged every month")

    @field_validator("principal_fees", "period_fees", mode="after")
    @classmethod
    def coerce_fees(cls, v: list[Any]) -> list[Decimal | None]:
        return list(normalize_fees(v))


class ScheduleRequest(LoanRequest):
    start_date: date | None = Field(None, description="Loan start; defaults to today")


class EffectiveRateRequest(BaseModel):
    loan_amount: Decimal = Field(..., gt=0)
    monthly_payment: Decimal = Field(..., gt=0)
    period: int = Field(..., gt=0, le=settings.max_term_years)


class LTVRequest(BaseModel):
    loan_amount: Decimal = Field(..., ge=0)
    purchase_price: Decimal = Field(..., ge=0)


# ---- Response schemas ----

class PaymentResponse(BaseModel):
    monthly_payment: Decimal
    monthly_payment_with_fees: Decimal
    principal_fees_total: Decimal
    period_fees_total: Decimal


class EffectiveRateResponse(BaseModel):
    effective_rate: Decimal


class ScheduleEntryResponse(BaseModel):
    year: int
    month: int  # Zero-based
    down_payment: Decimal
    interest: Decimal
    fees_paid: Decimal
    remainder: Decimal


class YearlySummaryResponse(BaseModel):
    year: int
    payments: int
    down_payment: Decimal
    interest: Decimal
    fees_paid: Decimal
    total_paid: Decimal
    ending_remainder: Decimal


class ScheduleResponse(BaseModel):
    start_date: date
    monthly_payment: Decimal
    entries: list[ScheduleEntryResponse]
    yearly: list[YearlySummaryResponse]


class LTVResponse(BaseModel):
    ltv: Decimal
