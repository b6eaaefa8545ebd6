"""Full quote: first mortgage, DPA stack, discount points and guardrails."""

from __future__ import annotations
import logging
from typing import Iterable, List, Tuple

from pydantic import BaseModel

from homequote.adjust import AdjustmentResult, CltvAdjustment, adjust_down_payment_for_cltv, calculate_adjustments
from homequote.dpa import (
    DPAEntry,
    calculate_cltv,
    calculate_ltv,
    calculate_total_dpa,
    calculate_total_dpa_fees,
    calculate_total_dpa_payment,
    waives_intangible_and_deed,
)
from homequote.models import DEFAULT_FEES, ClosingCostFees, MortgageInputs, MortgageOptions, MortgageResults
from homequote.mortgage import calculate_mortgage
from homequote.rules import RuleResult, evaluate_rules

logger = logging.getLogger(__name__)


class Quote(BaseModel):
    inputs: MortgageInputs
    results: MortgageResults
    dpa_entries: List[DPAEntry]
    total_dpa: float
    total_dpa_payment: float
    total_dpa_fees: float
    ltv: float
    cltv: float
    discount_points_pct: float
    discount_points_amount: float
    cash_to_close: float
    monthly_total: float
    tax_waived: bool
    adjustments: AdjustmentResult
    warnings: List[RuleResult]


def discount_points_amount(results: MortgageResults, loan_type, points_pct) -> float:
    """Points are charged on the fee-inclusive loan for FHA/VA, else on the base loan."""

    loan = results.base_loan if loan_type in ("FHA", "VA") else results.base_loan_before_fee
    return loan * points_pct / 100


def build_quote(
    inputs: MortgageInputs,
    dpa_entries: Iterable[DPAEntry] = (),
    fees: ClosingCostFees = DEFAULT_FEES,
    discount_points_pct: float = 0.0,
) -> Quote:
    """Run the engine and fold in the DPA stack.

    DPA reduces the cash needed and its fees add to it; DPA payments add to
    the monthly total.  The negative cash-to-close correction is previewed in
    ``adjustments`` and surfaced as a warning rather than applied.
    """

    entries = list(dpa_entries)
    tax_waived = waives_intangible_and_deed(entries)
    results = calculate_mortgage(
        inputs, fees, MortgageOptions(waive_intangible_and_deed=tax_waived)
    )

    total_dpa = calculate_total_dpa(entries, inputs.price, results.base_loan)
    total_dpa_payment = calculate_total_dpa_payment(entries, inputs.price, results.base_loan)
    total_dpa_fees = calculate_total_dpa_fees(entries)
    points = discount_points_amount(results, inputs.loan_type, discount_points_pct)
    cash_to_close = results.cash_to_close + points - total_dpa + total_dpa_fees

    adjustments = calculate_adjustments(
        inputs.price,
        inputs.down_pct,
        results.base_loan,
        total_dpa,
        results.closing_costs,
        results.prepaids,
        results.seller_credit_amount,
        inputs.loan_type,
    )
    cltv = calculate_cltv(results.base_loan, total_dpa, inputs.price)
    warnings = evaluate_rules(
        {
            "price": inputs.price,
            "loan_type": inputs.loan_type,
            "down_pct": inputs.down_pct,
            "ltv": results.ltv,
            "cltv": cltv,
            "cash_to_close": cash_to_close,
            "suggested_down_pct": adjustments.adjusted_down_pct if adjustments.cash_warning else None,
            "apr_converged": results.apr_converged,
            "tax_waived": tax_waived,
        }
    )

    return Quote(
        inputs=inputs,
        results=results,
        dpa_entries=entries,
        total_dpa=total_dpa,
        total_dpa_payment=total_dpa_payment,
        total_dpa_fees=total_dpa_fees,
        ltv=calculate_ltv(results.base_loan, inputs.price),
        cltv=cltv,
        discount_points_pct=discount_points_pct,
        discount_points_amount=points,
        cash_to_close=cash_to_close,
        monthly_total=results.monthly_total + total_dpa_payment,
        tax_waived=tax_waived,
        adjustments=adjustments,
        warnings=warnings,
    )


def upsert_dpa_entry(entries: Iterable[DPAEntry], entry: DPAEntry) -> List[DPAEntry]:
    """Replace the entry with the same id, or append it."""

    updated = list(entries)
    for i, existing in enumerate(updated):
        if existing.id == entry.id:
            updated[i] = entry
            return updated
    updated.append(entry)
    return updated


def save_dpa_entry(
    entries: Iterable[DPAEntry],
    entry: DPAEntry,
    price,
    down_pct,
    loan_type,
    max_passes=1,
) -> Tuple[List[DPAEntry], CltvAdjustment]:
    """Add or edit an entry and correct the down payment for the CLTV ceiling.

    The caller feeds ``adjustment.down_pct`` back into the next quote.
    """

    updated = upsert_dpa_entry(entries, entry)
    adjustment = adjust_down_payment_for_cltv(price, down_pct, updated, loan_type, max_passes=max_passes)
    logger.debug(
        "dpa_saved id=%s count=%d down_pct=%s",
        entry.id,
        len(updated),
        adjustment.down_pct,
        extra={"event": "dpa_saved", "down_pct": adjustment.down_pct},
    )
    return updated, adjustment


def remove_dpa_entry(entries: Iterable[DPAEntry], entry_id: str) -> List[DPAEntry]:
    return [e for e in entries if e.id != entry_id]
