"""Mortgage quote engine: financed fees, payment, APR, closing costs and cash to close."""

from __future__ import annotations
import logging

from homequote.apr import solve_apr
from homequote.calculators import monthly_payment, nz
from homequote.florida_taxes import FloridaTaxCalculator
from homequote.mi import compute_mi
from homequote.models import (
    DEFAULT_FEES,
    ClosingCostFees,
    MortgageInputs,
    MortgageOptions,
    MortgageResults,
    credit_band_score,
)
from homequote.presets import (
    FHA_TABLES,
    PREPAID_INSURANCE_MONTHS,
    PREPAID_INTEREST_DAYS,
    PREPAID_TAX_MONTHS,
    RATE_BY_LOAN,
    VA_FUNDING_FEE,
)

logger = logging.getLogger(__name__)


def va_funding_fee_rate(usage, down_pct, table=VA_FUNDING_FEE):
    """VA funding fee as a fraction of the loan for the usage class and down %."""

    tiers = table.get(usage or "firstUse", ())
    down = nz(down_pct)
    for min_down, fee_pct in tiers:
        if down >= min_down:
            return fee_pct / 100
    return 0.0


def financed_fee_rate(inputs: MortgageInputs) -> float:
    """Upfront fee rolled into the loan: VA funding fee or FHA UFMIP."""

    if inputs.loan_type == "VA":
        return va_funding_fee_rate(inputs.va_loan_usage, inputs.down_pct)
    if inputs.loan_type == "FHA":
        return FHA_TABLES["ufmip_pct"] / 100
    return 0.0


def note_rate_for(inputs: MortgageInputs) -> float:
    if inputs.custom_rate is not None and inputs.custom_rate > 0:
        return inputs.custom_rate
    return RATE_BY_LOAN.get(inputs.loan_type, RATE_BY_LOAN["Conventional"])


def seller_credit_amount(inputs: MortgageInputs) -> float:
    if inputs.seller_credit_type == "percentage":
        return inputs.price * inputs.seller_credit / 100
    return inputs.seller_credit


def calculate_mortgage(
    inputs: MortgageInputs,
    fees: ClosingCostFees = DEFAULT_FEES,
    options: MortgageOptions | None = None,
) -> MortgageResults:
    """Derive the full quote for one set of inputs.

    Every figure is a pure function of ``inputs``, ``fees`` and ``options``.
    Nothing is validated here; a zero price or term simply produces zeros.
    """

    options = options or MortgageOptions()
    fl = FloridaTaxCalculator()

    down_payment = inputs.price * inputs.down_pct / 100
    base_loan_before_fee = inputs.price - down_payment
    fee_rate = financed_fee_rate(inputs)
    financed_fee = base_loan_before_fee * fee_rate
    base_loan = base_loan_before_fee + financed_fee

    note_rate = note_rate_for(inputs)
    monthly_pi = monthly_payment(base_loan, note_rate, inputs.term_years * 12)

    # LTV follows the requested down payment, not the fee-inflated balance.
    ltv = 100 - inputs.down_pct
    monthly_mi, mi_rate_pct = compute_mi(
        inputs.loan_type,
        base_loan,
        ltv,
        credit_band_score(inputs.credit_band),
        inputs.term_years,
    )
    monthly_tax = inputs.annual_tax / 12
    monthly_ins = inputs.annual_ins / 12

    lenders_title = fl.lenders_title(base_loan)
    apr = solve_apr(
        base_loan,
        note_rate,
        inputs.term_years,
        fees.prepaid_finance_charges() + lenders_title,
        monthly_mi,
    )

    if options.waive_intangible_and_deed:
        intangible = 0.0
        deed = 0.0
    else:
        intangible = fl.intangible_tax(base_loan)
        deed = fl.deed_tax(
            base_loan, inputs.buyer_pays_seller_transfer, inputs.price, inputs.county
        )
    lenders_title_buyer_side = lenders_title if fl.buyer_pays_owners_title(inputs.county) else 0.0

    closing_costs = fees.total() + lenders_title_buyer_side + intangible + deed

    prepaid_taxes = monthly_tax * PREPAID_TAX_MONTHS
    prepaid_insurance = monthly_ins * PREPAID_INSURANCE_MONTHS
    prepaid_interest = base_loan * (note_rate / 100 / 365) * PREPAID_INTEREST_DAYS
    prepaids = prepaid_taxes + prepaid_insurance + prepaid_interest

    credit = seller_credit_amount(inputs)
    cash_to_close = down_payment + closing_costs + prepaids - credit

    logger.debug(
        "mortgage_quote loan_type=%s base_loan=%.2f note_rate=%s apr=%s cash_to_close=%.2f",
        inputs.loan_type,
        base_loan,
        note_rate,
        apr.apr,
        cash_to_close,
        extra={"event": "mortgage_quote", "loan_type": inputs.loan_type, "down_pct": inputs.down_pct},
    )

    return MortgageResults(
        base_loan=base_loan,
        base_loan_before_fee=base_loan_before_fee,
        financed_fee=financed_fee,
        fee_rate=fee_rate,
        note_rate=note_rate,
        apr=apr.apr,
        apr_converged=apr.converged,
        monthly_pi=monthly_pi,
        monthly_mi=monthly_mi,
        mi_rate_pct=mi_rate_pct,
        monthly_tax=monthly_tax,
        monthly_ins=monthly_ins,
        monthly_total=monthly_pi + monthly_mi + monthly_tax + monthly_ins,
        closing_costs=closing_costs,
        prepaids=prepaids,
        cash_to_close=cash_to_close,
        actual_down_payment=down_payment,
        seller_credit_amount=credit,
        ltv=ltv,
        lenders_title=lenders_title,
        intangible=intangible,
        deed=deed,
        lenders_title_buyer_side=lenders_title_buyer_side,
        prepaid_taxes=prepaid_taxes,
        prepaid_insurance=prepaid_insurance,
        prepaid_interest=prepaid_interest,
    )
