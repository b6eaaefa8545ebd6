import pytest

from homequote.settings import clear_settings_cache, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()


def test_defaults(monkeypatch):
    for var in ("HOMEQUOTE_ENV", "HOMEQUOTE_STATE_FILE", "HOMEQUOTE_LOG_LEVEL", "HOMEQUOTE_DEFAULT_COUNTY"):
        monkeypatch.delenv(var, raising=False)
    s = get_settings()
    assert s.app_env == "local"
    assert s.state_file == "session_data.json"
    assert s.log_level == "INFO"
    assert s.default_county == "Broward"
    assert get_settings() is s


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("HOMEQUOTE_ENV", "prod")
    monkeypatch.setenv("HOMEQUOTE_LOG_LEVEL", "debug")
    monkeypatch.setenv("HOMEQUOTE_LOG_FORMAT", "TEXT")
    monkeypatch.setenv("HOMEQUOTE_DEFAULT_COUNTY", "Miami-Dade")
    s = get_settings()
    assert s.app_env == "prod"
    assert s.log_level == "DEBUG"
    assert s.log_format == "text"
    assert s.default_county == "Miami-Dade"


@pytest.mark.parametrize(
    "var, value",
    [
        ("HOMEQUOTE_ENV", "staging"),
        ("HOMEQUOTE_STATE_FILE", "  "),
        ("HOMEQUOTE_LOG_LEVEL", "TRACE"),
        ("HOMEQUOTE_LOG_FORMAT", "xml"),
        ("HOMEQUOTE_DEFAULT_COUNTY", "Cook"),
    ],
)
def test_invalid_values_raise(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ValueError):
        get_settings()
