import json
import logging
import os
from typing import Any

import streamlit as st

from homequote.settings import get_settings

logger = logging.getLogger(__name__)

# Overrides the configured state file when set (tests patch this).
SESSION_FILE = ""

# Button and selectbox keys (`add_dpa`, `dpa_preset`, `remove_dpa_<id>`)
# land in session_state too; restoring them raises StreamlitAPIException, so
# only the calculator data below is written to disk.
PERSISTED_KEYS = {
    "calculator",
    "dpa_entries",
    "closing_fees",
    "discount_points",
}


def _session_file() -> str:
    return SESSION_FILE or get_settings().state_file


def _serializable(value: Any) -> bool:
    return isinstance(value, (int, float, str, bool, list, dict))


def load_state() -> None:
    """Restore the last-entered calculator inputs if a state file exists."""
    path = _session_file()
    if not os.path.exists(path):
        return
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning(
            "state_load_failed path=%s error=%s",
            path,
            exc,
            extra={"event": "state_load_failed", "error_type": type(exc).__name__, "error_message": str(exc)},
        )
        return
    for key, val in data.items():
        if key in PERSISTED_KEYS:
            st.session_state.setdefault(key, val)


def save_state() -> None:
    """Persist serializable calculator state to the state file."""
    path = _session_file()
    data = {
        k: v
        for k, v in st.session_state.items()
        if k in PERSISTED_KEYS and _serializable(v)
    }
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f)
    except (OSError, TypeError) as exc:
        logger.warning(
            "state_save_failed path=%s error=%s",
            path,
            exc,
            extra={"event": "state_save_failed", "error_type": type(exc).__name__, "error_message": str(exc)},
        )
