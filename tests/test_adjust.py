import pytest

from homequote.adjust import adjust_down_payment_for_cltv, calculate_adjustments, projected_cltv
from homequote.dpa import DPAEntry


def fixed(amount):
    return DPAEntry(type="fixed", value=amount)


def test_compliant_structure_is_untouched():
    res = adjust_down_payment_for_cltv(400000, 3.5, [fixed(10000)], "FHA")
    assert not res.adjusted
    assert res.satisfied
    assert res.passes == 0
    assert res.down_pct == 3.5


def test_fha_over_limit_rounds_up_to_half_percent():
    entries = [DPAEntry(type="salesPrice", value=5), fixed(15000)]
    assert projected_cltv(400000, 3.5, entries, "FHA") > 105
    res = adjust_down_payment_for_cltv(400000, 3.5, entries, "FHA")
    assert res.adjusted
    assert res.down_pct == 5.5
    assert res.original_down_pct == 3.5
    assert res.projected_cltv <= 105
    assert res.satisfied
    assert res.passes == 1


def test_correction_never_goes_below_program_minimum():
    res = adjust_down_payment_for_cltv(400000, 0, [fixed(25000)], "Conventional")
    assert res.down_pct == 3.0
    assert res.satisfied


def test_unsatisfiable_clamps_to_full_down_payment():
    res = adjust_down_payment_for_cltv(400000, 3, [fixed(500000)], "Conventional")
    assert res.down_pct == 100
    assert not res.satisfied
    assert res.projected_cltv == pytest.approx(125)


def test_va_loan_relative_dpa():
    entries = [DPAEntry(type="loanAmount", value=5), fixed(5000)]
    res = adjust_down_payment_for_cltv(400000, 0, entries, "VA")
    assert res.down_pct == 4.0
    assert res.projected_cltv == pytest.approx(104.37, abs=0.01)


def test_zero_price_is_a_no_op():
    res = adjust_down_payment_for_cltv(0, 3, [fixed(500000)], "Conventional")
    assert not res.adjusted
    assert res.down_pct == 3


def test_negative_cash_reduces_loan():
    res = calculate_adjustments(400000, 3, 388000, 30000, 8000, 5000, 0, "Conventional")
    assert res.cltv_warning is None
    assert res.cash_warning == "Loan adjusted to eliminate negative cash to close"
    assert res.adjusted_base_loan == pytest.approx(383000)
    assert res.adjusted_down_pct == pytest.approx(4.25)
    assert res.ltv_warning is None


def test_cltv_limit_reduces_loan_and_flags_ltv():
    res = calculate_adjustments(400000, 0, 400000, 30000, 15000, 6000, 0, "Conventional")
    assert res.cltv_warning == "Loan adjusted to meet 105% CLTV limit"
    assert res.adjusted_base_loan == pytest.approx(390000)
    assert res.adjusted_down_pct == pytest.approx(2.5)
    assert res.cash_warning is None
    assert res.ltv_warning == "LTV (97.5%) exceeds Conventional maximum of 97%"


def test_ltv_only_warning():
    res = calculate_adjustments(400000, 1, 396000, 0, 8000, 5000, 0, "Conventional")
    assert res.adjusted_base_loan == 396000
    assert res.ltv_warning == "LTV (99.0%) exceeds Conventional maximum of 97%"
    assert res.cltv_warning is None and res.cash_warning is None


def test_adjustments_guard_zero_price():
    res = calculate_adjustments(0, 3, 0, 10000, 0, 0, 0, "FHA")
    assert res.adjusted_down_pct == 3
    assert res.ltv_warning is None


def test_extra_passes_reproject_loan_relative_dpa():
    entries = [DPAEntry(type="loanAmount", value=5), fixed(5000)]
    one = adjust_down_payment_for_cltv(400000, 0, entries, "VA", max_passes=1)
    many = adjust_down_payment_for_cltv(400000, 0, entries, "VA", max_passes=5)
    assert many.satisfied
    assert many.passes <= 5
    assert many.down_pct == one.down_pct
