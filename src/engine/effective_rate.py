"""Effective annual interest rate implied by a known monthly payment.

Inverts the annuity formula by bisection over the monthly growth factor
g = 1 + monthly rate, searched on [1.0, 2.0] (0% to 100% a month).

Pure functions. No I/O.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from src.config import settings

logger = logging.getLogger(__name__)

FOUR_PLACES = Decimal("0.0001")
PAYMENTS_PER_YEAR = 12
GUESS_TOLERANCE = 1e-5  # On the monthly factor, roughly +-0.0003 on the annual rate

LOWER_FACTOR = 1.0
UPPER_FACTOR = 2.0


class EffectiveRateConvergenceError(ArithmeticError):
    """The bisection hit its iteration cap before successive guesses settled."""

    def __init__(self, iterations: int, last_guess: float):
        self.iterations = iterations
        self.last_guess = last_guess
        super().__init__(
            f"Effective rate did not converge after {iterations} iterations "
            f"(last monthly factor {last_guess:.8f})"
        )


def _financeable_principal(monthly_payment: float, factor: float, n_payments: int) -> float:
    """Present value of n level payments at monthly growth factor `factor`."""
    return (
        monthly_payment * factor * (1.0 - factor ** n_payments)
        / (1.0 - factor)
        / factor ** (n_payments + 1)
    )


def solve_effective_rate(
    loan_amount: Decimal,
    monthly_payment: Decimal,
    period: int,
    max_iterations: int | None = None,
) -> Decimal:
    """Recover the effective annual rate from loan amount, payment and term.

    Returns (1 + monthly rate)^12 - 1 rounded to four places. The bracket is
    never widened: if the true rate lies outside it the search settles on the
    edge, which is logged as a warning rather than corrected.

    Raises:
        EffectiveRateConvergenceError: If successive guesses are still more
            than the tolerance apart after max_iterations.
    """
    cap = max_iterations if max_iterations is not None else settings.solver_max_iterations
    amount = float(loan_amount)
    payment = float(monthly_payment)
    n_payments = period * PAYMENTS_PER_YEAR

    low, high = LOWER_FACTOR, UPPER_FACTOR
    guess = 0.0
    moved_low = moved_high = False

    for iteration in range(1, cap + 1):
        previous = guess
        guess = low + (high - low) / 2.0
        provisional = _financeable_principal(payment, guess, n_payments)
        # A larger factor finances less principal for the same payment
        if provisional < amount:
            high = guess
            moved_high = True
        else:
            low = guess
            moved_low = True
        if abs(guess - previous) <= GUESS_TOLERANCE:
            break
    else:
        raise EffectiveRateConvergenceError(cap, guess)

    logger.debug(
        "Effective rate converged in %s iterations, monthly factor %.8f", iteration, guess
    )
    if not moved_low:
        logger.warning(
            "Effective rate pinned to the 0%% monthly edge (loan %s, payment %s, %s years)",
            loan_amount, monthly_payment, period,
        )
    elif not moved_high:
        logger.warning(
            "Effective rate pinned to the 100%% monthly edge (loan %s, payment %s, %s years)",
            loan_amount, monthly_payment, period,
        )

    annual = guess ** PAYMENTS_PER_YEAR - 1
    return Decimal(str(annual)).quantize(FOUR_PLACES, ROUND_HALF_UP)
