"""Down payment assistance entries, preset catalog and aggregation."""

from __future__ import annotations
import uuid
from typing import Iterable, List, Literal, Optional

import pandas as pd
from pydantic import BaseModel, Field

from homequote.calculators import interest_only_payment, monthly_payment, nz
from homequote.presets import DEFAULT_MAX_LTV, MAX_LTV_BY_LOAN

DPAValueType = Literal["salesPrice", "loanAmount", "fixed"]
DPAPaymentType = Literal["none", "fixed", "loanPI", "loanIO"]

# Programs whose presence waives Florida intangible tax and doc stamps.
TAX_WAIVED_PROGRAMS = ("Hometown Heroes", "FL Assist", "FHFC HFA Plus")


def generate_dpa_id() -> str:
    return f"dpa_{uuid.uuid4().hex[:12]}"


class DPAEntry(BaseModel):
    """One assistance program attached to a quote.

    ``value`` is a percentage (0-100) for ``salesPrice`` and ``loanAmount``
    entries and a dollar amount for ``fixed`` entries.  ``rate`` and ``term``
    (months) only matter for ``loanPI`` and ``loanIO`` payments.
    """

    id: str = Field(default_factory=generate_dpa_id)
    name: str = ""
    type: DPAValueType = "salesPrice"
    value: float = 0.0
    payment_type: DPAPaymentType = "none"
    rate: float = 0.0
    term: int = 360
    fixed_payment: float = 0.0
    fees: float = 0.0


def create_empty_dpa() -> DPAEntry:
    return DPAEntry()


class DPAPreset(BaseModel):
    """Template for a named program.

    When ``rate_offset`` is set the entry rate is the first mortgage rate plus
    the offset, so presets are instantiated with :meth:`build` at selection
    time rather than copied as static records.
    """

    label: str
    name: str
    type: DPAValueType
    value: float
    payment_type: DPAPaymentType = "none"
    rate: float = 0.0
    term: int = 0
    fixed_payment: float = 0.0
    fees: float = 0.0
    rate_offset: Optional[float] = None

    def build(self, first_mortgage_rate: float = 0.0) -> DPAEntry:
        rate = self.rate
        if self.rate_offset is not None:
            rate = round(nz(first_mortgage_rate) + self.rate_offset, 3)
        return DPAEntry(
            name=self.name,
            type=self.type,
            value=self.value,
            payment_type=self.payment_type,
            rate=rate,
            term=self.term,
            fixed_payment=self.fixed_payment,
            fees=self.fees,
        )


DPA_PRESETS: List[DPAPreset] = [
    DPAPreset(label="Hometown Heroes (5% of Loan)", name="Hometown Heroes", type="loanAmount", value=5, fees=675),
    DPAPreset(label="FL Assist (Up to $10,000)", name="FL Assist", type="fixed", value=10000, fees=675),
    DPAPreset(label="FHFC HFA Plus Grant (3% of Loan)", name="FHFC HFA Plus", type="loanAmount", value=3, fees=675),
    DPAPreset(label="FHFC HFA Plus Grant (4% of Loan)", name="FHFC HFA Plus", type="loanAmount", value=4, fees=675),
    DPAPreset(label="FHFC HFA Plus Grant (5% of Loan)", name="FHFC HFA Plus", type="loanAmount", value=5, fees=675),
    DPAPreset(
        label="Access Zero 3.5% (3.5% of Sales Price)",
        name="Access Zero 3.5%",
        type="salesPrice",
        value=3.5,
        payment_type="loanPI",
        term=120,
        fees=500,
        rate_offset=2.0,
    ),
    DPAPreset(
        label="Access Zero 5% (5% of Sales Price)",
        name="Access Zero 5%",
        type="salesPrice",
        value=5,
        payment_type="loanPI",
        term=120,
        fees=500,
        rate_offset=2.0,
    ),
]


def find_preset(label: str) -> DPAPreset:
    for preset in DPA_PRESETS:
        if preset.label == label:
            return preset
    raise KeyError(f"Unknown DPA preset: {label}")


def waives_intangible_and_deed(entries: Iterable[DPAEntry]) -> bool:
    """True when any entry is a program that waives intangible tax and doc stamps."""
    return any(e.name in TAX_WAIVED_PROGRAMS for e in entries)


def calculate_dpa_amount(entry: DPAEntry, sales_price, loan_amount) -> float:
    """Dollar amount of one entry.

    ``loan_amount`` must be the final loan including any financed VA funding
    fee or FHA UFMIP.
    """

    if entry.type == "salesPrice":
        return nz(sales_price) * entry.value / 100
    if entry.type == "loanAmount":
        return nz(loan_amount) * entry.value / 100
    if entry.type == "fixed":
        return entry.value
    return 0.0


def calculate_dpa_payment(entry: DPAEntry, dpa_amount) -> float:
    """Monthly payment owed on one entry."""

    if entry.payment_type == "fixed":
        return entry.fixed_payment
    if entry.payment_type == "loanPI":
        return monthly_payment(dpa_amount, entry.rate, entry.term)
    if entry.payment_type == "loanIO":
        return interest_only_payment(dpa_amount, entry.rate)
    return 0.0


def calculate_total_dpa(entries: Iterable[DPAEntry], sales_price, loan_amount) -> float:
    return sum(calculate_dpa_amount(e, sales_price, loan_amount) for e in entries)


def calculate_total_dpa_payment(entries: Iterable[DPAEntry], sales_price, loan_amount) -> float:
    return sum(
        calculate_dpa_payment(e, calculate_dpa_amount(e, sales_price, loan_amount))
        for e in entries
    )


def calculate_total_dpa_fees(entries: Iterable[DPAEntry]) -> float:
    return sum(e.fees for e in entries)


def dpa_breakdown(entries: Iterable[DPAEntry], sales_price, loan_amount) -> pd.DataFrame:
    """One row per entry with its amount, monthly payment and fees."""

    rows = []
    for i, e in enumerate(entries, start=1):
        amount = calculate_dpa_amount(e, sales_price, loan_amount)
        rows.append(
            {
                "Name": e.name or f"DPA Program {i}",
                "Amount": amount,
                "Payment": calculate_dpa_payment(e, amount),
                "Fees": e.fees,
            }
        )
    return pd.DataFrame(rows, columns=["Name", "Amount", "Payment", "Fees"])


def calculate_ltv(loan_amount, sales_price) -> float:
    if nz(sales_price) <= 0:
        return 0.0
    return nz(loan_amount) / nz(sales_price) * 100


def calculate_cltv(loan_amount, total_dpa, sales_price) -> float:
    if nz(sales_price) <= 0:
        return 0.0
    return (nz(loan_amount) + nz(total_dpa)) / nz(sales_price) * 100


def get_max_ltv(loan_type) -> float:
    return MAX_LTV_BY_LOAN.get(loan_type, DEFAULT_MAX_LTV)
