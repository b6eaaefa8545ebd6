from __future__ import annotations
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict

LoanType = Literal["Conventional", "FHA", "VA", "DSCR"]
CreditBand = Literal[
    "760+",
    "740-759",
    "720-739",
    "700-719",
    "680-699",
    "660-679",
    "640-659",
    "620-639",
    "Below 620",
]
VALoanUsage = Literal["firstUse", "subsequentUse", "exempt"]
SellerCreditType = Literal["percentage", "dollar"]


class MortgageInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    price: float = 450000.0
    loan_type: LoanType = "Conventional"
    down_pct: float = 3.0
    term_years: int = 30
    credit_band: CreditBand = "740-759"
    county: str = "Broward"
    annual_tax: float = 6000.0
    annual_ins: float = 2400.0
    buyer_pays_seller_transfer: bool = False
    va_loan_usage: VALoanUsage = "firstUse"
    seller_credit: float = 0.0
    seller_credit_type: SellerCreditType = "percentage"
    custom_rate: Optional[float] = None


class ClosingCostFees(BaseModel):
    model_config = ConfigDict(frozen=True)

    underwriting_fee: float = 795.0
    processing_fee: float = 995.0
    appraisal_fee: float = 550.0
    tax_service_fee: float = 68.0
    flood_cert_fee: float = 5.0
    survey_fee: float = 400.0
    title_closing_fee: float = 795.0
    owners_title_fee: float = 450.0
    title_search_fee: float = 125.0
    endorsements: float = 300.0
    recording_fee: float = 250.0
    credit_report_fee: float = 225.0

    def total(self) -> float:
        return sum(self.model_dump().values())

    def prepaid_finance_charges(self) -> float:
        """Fees treated as finance charges for APR, before lender's title."""
        return (
            self.underwriting_fee
            + self.processing_fee
            + self.tax_service_fee
            + self.title_closing_fee
            + self.flood_cert_fee
            + self.endorsements
        )


DEFAULT_FEES = ClosingCostFees()


class MortgageOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    waive_intangible_and_deed: bool = False


class MortgageResults(BaseModel):
    model_config = ConfigDict(frozen=True)

    base_loan: float
    base_loan_before_fee: float
    financed_fee: float
    fee_rate: float
    note_rate: float
    apr: float
    apr_converged: bool
    monthly_pi: float
    monthly_mi: float
    mi_rate_pct: float
    monthly_tax: float
    monthly_ins: float
    monthly_total: float
    closing_costs: float
    prepaids: float
    cash_to_close: float
    actual_down_payment: float
    seller_credit_amount: float
    ltv: float
    lenders_title: float
    intangible: float
    deed: float
    lenders_title_buyer_side: float
    prepaid_taxes: float
    prepaid_insurance: float
    prepaid_interest: float


def credit_band_score(band) -> int:
    """Map a credit band label to the score used to index the MI grid."""
    if band == "760+":
        return 760
    if band == "Below 620":
        return 619
    try:
        return int(str(band).split("-", 1)[0])
    except ValueError:
        return 740
