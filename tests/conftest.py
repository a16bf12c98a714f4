"""Canonical test fixtures used across all engine tests.

Fixture: 4,000,000 mortgage at 2.5% over 25 years, starting October 1985.
"""

from datetime import date
from decimal import Decimal

import pytest

from src.engine.fees import fee_set
from src.models.loan import LoanTerms


@pytest.fixture
def base_date() -> date:
    return date(1985, 10, 26)


@pytest.fixture
def mortgage_terms() -> LoanTerms:
    """4M over 25 years at 2.5%."""
    return LoanTerms(loan_amount=Decimal("4000000"), rate=Decimal("0.025"), period=25)


@pytest.fixture
def car_loan_terms() -> LoanTerms:
    """20K over 5 years at 7.5%."""
    return LoanTerms(loan_amount=Decimal("20000"), rate=Decimal("0.075"), period=5)


@pytest.fixture
def typical_fees():
    """Establishment + deposit fee once, 100 per month in term fees."""
    return fee_set(principal_fees=[2000, 1000], period_fees=[100])
