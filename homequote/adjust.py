"""Keep combined financing under the CLTV ceiling after DPA changes."""

from __future__ import annotations
import logging
import math
from typing import Iterable, Optional

from pydantic import BaseModel

from homequote.calculators import nz
from homequote.dpa import DPAEntry, calculate_cltv, calculate_ltv, calculate_total_dpa, get_max_ltv
from homequote.presets import APPROX_FEE_MULTIPLIER, MAX_CLTV, MIN_DOWN_BY_LOAN

logger = logging.getLogger(__name__)


class CltvAdjustment(BaseModel):
    down_pct: float
    original_down_pct: float
    projected_cltv: float
    adjusted: bool
    satisfied: bool
    passes: int = 0


class AdjustmentResult(BaseModel):
    adjusted_down_pct: float
    adjusted_base_loan: float
    ltv_warning: Optional[str] = None
    cltv_warning: Optional[str] = None
    cash_warning: Optional[str] = None


def fee_multiplier(loan_type) -> float:
    """Flat financed-fee factor used to project the loan during DPA correction."""
    return APPROX_FEE_MULTIPLIER.get(loan_type, 1.0)


def projected_loan(price, down_pct, loan_type) -> float:
    return nz(price) * (1 - nz(down_pct) / 100) * fee_multiplier(loan_type)


def projected_cltv(price, down_pct, entries, loan_type) -> float:
    loan = projected_loan(price, down_pct, loan_type)
    return calculate_cltv(loan, calculate_total_dpa(entries, price, loan), price)


def adjust_down_payment_for_cltv(
    price,
    down_pct,
    entries: Iterable[DPAEntry],
    loan_type,
    max_cltv=MAX_CLTV,
    max_passes=1,
) -> CltvAdjustment:
    """Raise the down payment until first mortgage plus DPA fits under ``max_cltv``.

    Each pass solves ``max_base_loan * multiplier + total_dpa = price * max_cltv``
    for the base loan before fees, converts it to a down payment %, rounds up
    to the next half percent and clamps it between the loan type's minimum and
    100.  A single pass is the normal correction; more passes re-project
    loan-relative DPA against the corrected loan.  ``satisfied`` is False when
    the structure is still over the ceiling after the last pass.
    """

    entries = list(entries)
    price = nz(price)
    original = nz(down_pct, MIN_DOWN_BY_LOAN.get(loan_type, 0.0))
    current = original
    cltv = projected_cltv(price, current, entries, loan_type)
    passes = 0
    if price <= 0:
        return CltvAdjustment(
            down_pct=current, original_down_pct=original, projected_cltv=cltv,
            adjusted=False, satisfied=True,
        )

    multiplier = fee_multiplier(loan_type)
    min_down = MIN_DOWN_BY_LOAN.get(loan_type, 0.0)
    while cltv > max_cltv and passes < max_passes:
        passes += 1
        total_dpa = calculate_total_dpa(entries, price, projected_loan(price, current, loan_type))
        max_base_loan = (price * max_cltv / 100 - total_dpa) / multiplier
        optimal = (price - max_base_loan) / price * 100
        corrected = min(max(math.ceil(optimal * 2) / 2, min_down), 100.0)
        if corrected == current:
            break
        current = corrected
        cltv = projected_cltv(price, current, entries, loan_type)

    adjusted = current != original
    if adjusted:
        logger.info(
            "cltv_adjustment loan_type=%s down_pct=%s->%s projected_cltv=%.2f passes=%d",
            loan_type, original, current, cltv, passes,
            extra={"event": "cltv_adjustment", "loan_type": loan_type, "down_pct": current},
        )
    return CltvAdjustment(
        down_pct=current,
        original_down_pct=original,
        projected_cltv=cltv,
        adjusted=adjusted,
        satisfied=cltv <= max_cltv,
        passes=passes,
    )


def calculate_adjustments(
    sales_price,
    original_down_pct,
    total_loan,
    total_dpa,
    closing_costs,
    prepaids,
    seller_credit,
    loan_type,
) -> AdjustmentResult:
    """Reduce the loan for the CLTV limit and for negative cash to close.

    ``total_loan`` includes financed fees.  Returns the corrected down payment
    and loan with one warning per constraint that forced a change, plus a
    warning when the resulting LTV is above the program maximum.
    """

    price = nz(sales_price)
    adjusted_down_pct = nz(original_down_pct)
    adjusted_loan = nz(total_loan)
    cltv_warning = None
    cash_warning = None
    ltv_warning = None
    if price <= 0:
        return AdjustmentResult(adjusted_down_pct=adjusted_down_pct, adjusted_base_loan=adjusted_loan)

    if calculate_cltv(adjusted_loan, total_dpa, price) > MAX_CLTV:
        adjusted_loan = price * MAX_CLTV / 100 - nz(total_dpa)
        adjusted_down_pct = (price - adjusted_loan) / price * 100
        cltv_warning = f"Loan adjusted to meet {MAX_CLTV:g}% CLTV limit"

    down_payment = price * adjusted_down_pct / 100
    cash = down_payment + nz(closing_costs) + nz(prepaids) - nz(seller_credit) - nz(total_dpa)
    if cash < 0:
        adjusted_loan -= abs(cash)
        adjusted_down_pct = (price - adjusted_loan) / price * 100
        cash_warning = "Loan adjusted to eliminate negative cash to close"

    max_ltv = get_max_ltv(loan_type)
    final_ltv = calculate_ltv(adjusted_loan, price)
    if final_ltv > max_ltv:
        ltv_warning = f"LTV ({final_ltv:.1f}%) exceeds {loan_type} maximum of {max_ltv:g}%"

    return AdjustmentResult(
        adjusted_down_pct=adjusted_down_pct,
        adjusted_base_loan=adjusted_loan,
        ltv_warning=ltv_warning,
        cltv_warning=cltv_warning,
        cash_warning=cash_warning,
    )
