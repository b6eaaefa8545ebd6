import pytest

from homequote.dpa import (
    DPA_PRESETS,
    DPAEntry,
    calculate_cltv,
    calculate_dpa_amount,
    calculate_dpa_payment,
    calculate_ltv,
    calculate_total_dpa,
    calculate_total_dpa_fees,
    calculate_total_dpa_payment,
    create_empty_dpa,
    dpa_breakdown,
    find_preset,
    get_max_ltv,
    waives_intangible_and_deed,
)


def test_amount_by_value_type():
    assert calculate_dpa_amount(DPAEntry(type="salesPrice", value=5), 400000, 300000) == 20000
    assert calculate_dpa_amount(DPAEntry(type="loanAmount", value=5), 400000, 300000) == 15000
    assert calculate_dpa_amount(DPAEntry(type="fixed", value=7500), 400000, 300000) == 7500


def test_payment_types():
    assert calculate_dpa_payment(DPAEntry(payment_type="none"), 20000) == 0
    assert calculate_dpa_payment(DPAEntry(payment_type="fixed", fixed_payment=85), 20000) == 85
    assert calculate_dpa_payment(DPAEntry(payment_type="loanIO", rate=6.0), 20000) == pytest.approx(100)
    amortizing = calculate_dpa_payment(DPAEntry(payment_type="loanPI", rate=6.0, term=120), 20000)
    assert amortizing == pytest.approx(222.04, abs=0.01)


def test_amortizing_payment_with_zero_rate_or_term_is_zero():
    assert calculate_dpa_payment(DPAEntry(payment_type="loanPI", rate=0, term=120), 20000) == 0
    assert calculate_dpa_payment(DPAEntry(payment_type="loanPI", rate=6, term=0), 20000) == 0


def test_empty_entry_defaults():
    e = create_empty_dpa()
    assert e.id.startswith("dpa_")
    assert e.type == "salesPrice"
    assert e.payment_type == "none"
    assert e.term == 360
    assert create_empty_dpa().id != e.id


def test_preset_rate_follows_first_mortgage():
    entry = find_preset("Access Zero 5% (5% of Sales Price)").build(6.5)
    assert entry.rate == 8.5
    assert entry.term == 120
    assert entry.payment_type == "loanPI"
    assert entry.fees == 500


def test_preset_without_offset_keeps_static_values():
    entry = find_preset("FL Assist (Up to $10,000)").build(6.5)
    assert entry.type == "fixed"
    assert entry.value == 10000
    assert entry.rate == 0
    assert entry.fees == 675


def test_presets_build_distinct_ids():
    p = DPA_PRESETS[0]
    assert p.build(7.0).id != p.build(7.0).id


def test_unknown_preset_raises():
    with pytest.raises(KeyError):
        find_preset("Nope")


def test_tax_waiver_programs():
    assert waives_intangible_and_deed([DPAEntry(name="FL Assist")])
    assert waives_intangible_and_deed([DPAEntry(name="Other"), DPAEntry(name="Hometown Heroes")])
    assert not waives_intangible_and_deed([DPAEntry(name="Access Zero 5%")])
    assert not waives_intangible_and_deed([])


def test_totals():
    entries = [
        DPAEntry(type="salesPrice", value=5, payment_type="loanIO", rate=6.0, fees=500),
        DPAEntry(type="fixed", value=10000, payment_type="fixed", fixed_payment=50, fees=675),
    ]
    assert calculate_total_dpa(entries, 400000, 380000) == 30000
    assert calculate_total_dpa_payment(entries, 400000, 380000) == pytest.approx(150)
    assert calculate_total_dpa_fees(entries) == 1175
    assert calculate_total_dpa([], 400000, 380000) == 0


def test_breakdown_frame():
    entries = [DPAEntry(name="FL Assist", type="fixed", value=10000, fees=675), DPAEntry(type="loanAmount", value=3)]
    df = dpa_breakdown(entries, 400000, 300000)
    assert list(df.columns) == ["Name", "Amount", "Payment", "Fees"]
    assert df["Name"].tolist() == ["FL Assist", "DPA Program 2"]
    assert df["Amount"].tolist() == [10000, 9000]
    assert dpa_breakdown([], 1, 1).empty


def test_ltv_and_cltv():
    assert calculate_ltv(386000, 400000) == pytest.approx(96.5)
    assert calculate_cltv(386000, 30000, 400000) == pytest.approx(104)
    assert calculate_ltv(100, 0) == 0
    assert calculate_cltv(100, 100, 0) == 0


def test_max_ltv_by_program():
    assert get_max_ltv("Conventional") == 97
    assert get_max_ltv("FHA") == 96.5
    assert get_max_ltv("VA") == 100
    assert get_max_ltv("DSCR") == 97
