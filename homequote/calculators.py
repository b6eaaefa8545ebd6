"""Amortization primitives shared by the first mortgage and DPA seconds."""

from __future__ import annotations
import math
import pandas as pd


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Calculator inputs arrive from form fields and cached JSON where blanks show
    up as ``None``, empty strings or ``NaN``.  This helper mirrors the
    spreadsheet ``NZ()`` function and keeps later math from breaking when a
    value is missing.
    """

    try:
        if x is None or (isinstance(x, float) and math.isnan(x)):
            return default
        if isinstance(x, str):
            x = x.replace(",", "").replace("$", "").strip()
            if not x:
                return default
        return float(x)
    except (TypeError, ValueError):
        return default


def monthly_payment(principal, annual_rate_pct, term_months):
    """Calculate the level monthly payment for a fixed-rate loan.

    ``principal`` is the starting loan amount, ``annual_rate_pct`` is the
    nominal yearly interest rate (e.g. ``6.5`` for 6.5%), and ``term_months``
    is the number of monthly payments.  A non-positive principal, rate or term
    yields ``0.0`` instead of a division error.
    """

    L = nz(principal)
    r = nz(annual_rate_pct) / 100 / 12
    n = int(nz(term_months))
    if L <= 0 or r <= 0 or n <= 0:
        return 0.0
    growth = (1 + r) ** n
    return L * (r * growth) / (growth - 1)


def interest_only_payment(principal, annual_rate_pct):
    """Monthly interest on ``principal`` with no amortization."""

    L = nz(principal)
    r = nz(annual_rate_pct) / 100 / 12
    if L <= 0 or r <= 0:
        return 0.0
    return L * r


def amortization_schedule(principal, annual_rate_pct, term_months) -> pd.DataFrame:
    """Month-by-month split of the level payment into interest and principal."""

    columns = ["Month", "Payment", "Interest", "Principal", "Balance"]
    pmt = monthly_payment(principal, annual_rate_pct, term_months)
    if pmt == 0.0:
        return pd.DataFrame(columns=columns)
    r = nz(annual_rate_pct) / 100 / 12
    balance = nz(principal)
    rows = []
    for month in range(1, int(nz(term_months)) + 1):
        interest = balance * r
        towards_principal = min(pmt - interest, balance)
        balance -= towards_principal
        rows.append((month, pmt, interest, towards_principal, max(balance, 0.0)))
    return pd.DataFrame(rows, columns=columns)
