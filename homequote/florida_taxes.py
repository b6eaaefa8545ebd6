"""Florida closing-cost taxes and lender's title premium."""

from __future__ import annotations
from typing import Dict

from homequote.calculators import nz
from homequote.presets import BUYER_PAYS_OWNERS_TITLE_COUNTIES, FL_TAX_RATES


class FloridaTaxCalculator:
    """Florida intangible tax, documentary stamps and title premium schedule.

    Rates come from ``FL_TAX_RATES`` unless a replacement table is given.
    County names are matched exactly; anything other than ``"Miami-Dade"``
    uses the statewide deed stamp rate.
    """

    def __init__(self, rates: Dict[str, float] | None = None) -> None:
        self.rates = dict(FL_TAX_RATES if rates is None else rates)

    def lenders_title(self, loan_amount) -> float:
        """$575 up to $100k of coverage, then $5 per additional $1,000."""
        loan = nz(loan_amount)
        base = self.rates["lenders_title_base"]
        limit = self.rates["lenders_title_base_limit"]
        if loan <= limit:
            return base
        return round((loan - limit) / 1000 * self.rates["lenders_title_per_thousand"] + base, 2)

    def intangible_tax(self, loan_amount) -> float:
        return round(nz(loan_amount) * self.rates["intangible"], 2)

    def deed_tax(self, loan_amount, include_seller_transfer, sales_price, county) -> float:
        """Note stamps on the loan plus, optionally, the seller's deed stamps."""
        note_stamps = nz(loan_amount) * self.rates["note_stamps"]
        seller_deed = 0.0
        if include_seller_transfer:
            rate = (
                self.rates["deed_stamps_miami_dade"]
                if county == "Miami-Dade"
                else self.rates["deed_stamps"]
            )
            seller_deed = nz(sales_price) * rate
        return round(note_stamps + seller_deed, 2)

    def buyer_pays_owners_title(self, county) -> bool:
        return county in BUYER_PAYS_OWNERS_TITLE_COUNTIES
