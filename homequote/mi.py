"""Monthly mortgage insurance by program."""

from __future__ import annotations
from typing import Tuple

from homequote.calculators import nz
from homequote.presets import CONV_MI_GRID, CONV_MI_SCORE_THRESHOLDS, FHA_TABLES


def conventional_mi_factor(ltv, credit_score, grid=CONV_MI_GRID):
    """Look up the private MI annual % for an LTV and credit score.

    ``grid`` maps an LTV floor to one rate per score threshold; the highest
    floor the LTV exceeds wins.  A score exactly on a threshold belongs to the
    better band.
    """

    ltv = nz(ltv)
    for floor in sorted(grid, reverse=True):
        if ltv > floor:
            rates = grid[floor]
            break
    else:
        return 0.0
    score = nz(credit_score, 740)
    for threshold, rate in zip(CONV_MI_SCORE_THRESHOLDS, rates):
        if score >= threshold:
            return rate
    return rates[-1]


def fha_mip_factor(ltv, table=FHA_TABLES):
    """FHA annual MIP % for the given LTV."""

    if nz(ltv) > table.get("high_ltv_above", 95.0):
        return table.get("annual_high_ltv", 0.55)
    return table.get("annual_low_ltv", 0.50)


def compute_mi(
    loan_type,
    loan_amount,
    ltv_pct,
    credit_score=740,
    term_years=30,
    conv_grid=CONV_MI_GRID,
    fha_table=FHA_TABLES,
) -> Tuple[float, float]:
    """Return ``(monthly_mi, annual_rate_pct)`` for the loan.

    FHA annual MIP is charged on the loan with the financed UFMIP backed out.
    VA and DSCR carry no monthly insurance and conventional loans drop MI at
    80% LTV.  ``term_years`` is accepted for callers that track it but the
    grid does not vary by term.
    """

    loan = nz(loan_amount)
    if loan_type == "FHA":
        base = loan / (1 + fha_table.get("ufmip_pct", 1.75) / 100)
        ann_pct = fha_mip_factor(ltv_pct, fha_table)
        return base * ann_pct / 100 / 12, ann_pct
    if loan_type == "Conventional":
        ann_pct = conventional_mi_factor(ltv_pct, credit_score, conv_grid)
        if ann_pct == 0.0:
            return 0.0, 0.0
        return loan * ann_pct / 100 / 12, ann_pct
    return 0.0, 0.0
