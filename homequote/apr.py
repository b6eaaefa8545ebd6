"""APR by bisection on the present value of the payment stream."""

from __future__ import annotations
import logging

from pydantic import BaseModel

from homequote.calculators import monthly_payment, nz

logger = logging.getLogger(__name__)

APR_LOWER_BOUND = 0.0001
APR_UPPER_BOUND = 0.30
APR_TOLERANCE = 0.000001
APR_MAX_ITERATIONS = 100


class AprResult(BaseModel):
    apr: float
    converged: bool
    iterations: int = 0


def present_value(payment, monthly_rate, periods):
    """Discounted value of ``periods`` level payments at ``monthly_rate``."""

    pv = 0.0
    for i in range(1, periods + 1):
        pv += payment / (1 + monthly_rate) ** i
    return pv


def solve_apr(
    base_loan,
    note_rate,
    term_years,
    prepaid_finance_charges,
    monthly_mi=0.0,
    lower=APR_LOWER_BOUND,
    upper=APR_UPPER_BOUND,
    tolerance=APR_TOLERANCE,
    max_iterations=APR_MAX_ITERATIONS,
) -> AprResult:
    """Find the annual rate at which the P&I + MI stream is worth the amount financed.

    The amount financed is ``base_loan`` less the prepaid finance charges.  On
    convergence the APR is rounded to three decimals.  If the bracket search
    does not get within ``tolerance`` dollars, the note rate is returned with
    ``converged=False`` so callers can still display a number.
    """

    loan = nz(base_loan)
    rate = nz(note_rate)
    periods = int(nz(term_years) * 12)
    if loan <= 0 or periods <= 0:
        logger.warning(
            "apr_fallback reason=non_positive_loan_or_term loan=%s periods=%s",
            loan,
            periods,
            extra={"event": "apr_fallback"},
        )
        return AprResult(apr=rate, converged=False)

    target_pv = loan - nz(prepaid_finance_charges)
    payment = monthly_payment(loan, rate, periods) + nz(monthly_mi)

    for iteration in range(1, max_iterations + 1):
        guess = (lower + upper) / 2
        pv = present_value(payment, guess / 12, periods)
        if abs(pv - target_pv) < tolerance:
            return AprResult(apr=round(guess * 100, 3), converged=True, iterations=iteration)
        if pv > target_pv:
            lower = guess
        else:
            upper = guess

    logger.warning(
        "apr_fallback reason=no_convergence note_rate=%s target_pv=%.2f",
        rate,
        target_pv,
        extra={"event": "apr_fallback"},
    )
    return AprResult(apr=rate, converged=False, iterations=max_iterations)
