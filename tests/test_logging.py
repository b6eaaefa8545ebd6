import json
import logging

from homequote.logging import JsonFormatter, configure_logging


def test_json_formatter_includes_extras():
    record = logging.LogRecord("homequote.adjust", logging.INFO, __file__, 1, "cltv %s", ("ok",), None)
    record.loan_type = "FHA"
    payload = json.loads(JsonFormatter().format(record))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "homequote.adjust"
    assert payload["message"] == "cltv ok"
    assert payload["loan_type"] == "FHA"
    assert payload["timestamp"].endswith("Z")


def test_configure_logging_is_idempotent(monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.delattr(root, "_homequote_logging_configured", raising=False)
    level = root.level
    before = len(root.handlers)
    configure_logging("DEBUG", "text")
    configure_logging("DEBUG", "json")
    assert len(root.handlers) == before + 1
    assert root.level == logging.DEBUG
    root.setLevel(level)


def test_cltv_adjustment_logs_structured_fields(caplog):
    from homequote.adjust import adjust_down_payment_for_cltv
    from homequote.dpa import DPAEntry

    caplog.set_level(logging.INFO, logger="homequote.adjust")
    adjust_down_payment_for_cltv(400000, 3.5, [DPAEntry(type="fixed", value=35000)], "FHA")
    record = next(r for r in caplog.records if r.name == "homequote.adjust")
    assert record.event == "cltv_adjustment"
    assert record.loan_type == "FHA"
    assert record.down_pct == record.args[2]
    payload = json.loads(JsonFormatter().format(record))
    assert payload["event"] == "cltv_adjustment"
    assert payload["down_pct"] > 3.5


def test_invalid_rate_snapshot_logs_error_fields(tmp_path, caplog):
    from homequote.rates import load_rate_snapshot

    path = tmp_path / "rates.json"
    path.write_text("not json")
    caplog.set_level(logging.WARNING, logger="homequote.rates")
    load_rate_snapshot(str(path))
    payload = json.loads(JsonFormatter().format(caplog.records[-1]))
    assert payload["event"] == "rate_snapshot_invalid"
    assert payload["error_type"] == "JSONDecodeError"
    assert payload["error_message"]
