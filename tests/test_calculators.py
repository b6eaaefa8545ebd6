import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(__file__)))

from homequote.calculators import (
    amortization_schedule,
    interest_only_payment,
    monthly_payment,
    nz,
)


def test_thirty_year_fixed_table_value():
    assert round(monthly_payment(300000, 6.0, 360), 2) == 1798.65


def test_fifteen_year_pays_more_per_month():
    assert monthly_payment(300000, 6.0, 180) > monthly_payment(300000, 6.0, 360)


@pytest.mark.parametrize(
    "principal, rate, term",
    [(0, 6.0, 360), (300000, 0, 360), (300000, 6.0, 0), (-5, 6.0, 360), (300000, -1, 360)],
)
def test_degenerate_inputs_return_zero(principal, rate, term):
    assert monthly_payment(principal, rate, term) == 0.0


def test_interest_only_payment():
    assert interest_only_payment(20000, 6.0) == pytest.approx(100.0)
    assert interest_only_payment(20000, 0) == 0.0


def test_nz_coerces_form_values():
    assert nz(None) == 0.0
    assert nz(float("nan"), 3.0) == 3.0
    assert nz("450,000") == 450000.0
    assert nz("$1,200.50") == 1200.50
    assert nz("", 7.5) == 7.5
    assert nz("abc") == 0.0


def test_amortization_schedule_pays_off_balance():
    sched = amortization_schedule(100000, 6.0, 120)
    assert len(sched) == 120
    assert sched["Principal"].sum() == pytest.approx(100000, abs=0.01)
    assert sched["Balance"].iloc[-1] == pytest.approx(0.0, abs=0.01)
    first = sched.iloc[0]
    assert first["Interest"] == pytest.approx(500.0)
    assert first["Payment"] == pytest.approx(monthly_payment(100000, 6.0, 120))


def test_amortization_schedule_empty_for_zero_rate():
    assert amortization_schedule(100000, 0, 120).empty
