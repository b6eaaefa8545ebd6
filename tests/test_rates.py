import json
import logging

from homequote.rates import FALLBACK_RATES, RateQuote, get_rate_for_loan_type, load_rate_snapshot

SNAPSHOT = {
    "updatedAt": "2026-10-19T12:00:00Z",
    "conventional30": {"noteRate": 6.75, "apr": 6.9},
    "fha30": {"noteRate": 6.25},
    "va30": {"noteRate": 6.0, "apr": 0},
}


def test_load_camel_case_snapshot(tmp_path):
    path = tmp_path / "rates.json"
    path.write_text(json.dumps(SNAPSHOT))
    rates = load_rate_snapshot(str(path))
    assert rates.updated_at == "2026-10-19T12:00:00Z"
    assert rates.conventional30.apr == 6.9
    assert rates.fha30.apr == 6.25
    assert rates.va30.apr == 6.0
    assert get_rate_for_loan_type(rates, "FHA") == 6.25
    assert get_rate_for_loan_type(rates, "VA") == 6.0
    assert get_rate_for_loan_type(rates, "Conventional") == 6.75
    assert get_rate_for_loan_type(rates, "DSCR") == 6.75


def test_rate_quote_accepts_field_name():
    assert RateQuote(note_rate=7.1).apr == 7.1


def test_no_snapshot_uses_static_rates():
    assert get_rate_for_loan_type(None, "DSCR") == 8.5
    assert get_rate_for_loan_type(None, "FHA") == 7.2
    assert load_rate_snapshot("") is FALLBACK_RATES


def test_missing_file_falls_back(tmp_path):
    assert load_rate_snapshot(str(tmp_path / "nope.json")) is FALLBACK_RATES


def test_invalid_file_logs_and_falls_back(tmp_path, caplog):
    path = tmp_path / "rates.json"
    path.write_text('{"conventional30": {"noteRate": 6.5}}')
    caplog.set_level(logging.WARNING)
    assert load_rate_snapshot(str(path)) is FALLBACK_RATES
    assert "rate_snapshot_invalid" in caplog.text

    path.write_text("not json")
    assert load_rate_snapshot(str(path)) is FALLBACK_RATES
