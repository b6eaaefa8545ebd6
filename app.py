import streamlit as st

from homequote.logging import configure_logging
from homequote.models import MortgageInputs
from homequote.quote import build_quote
from homequote.rates import load_rate_snapshot
from homequote.settings import get_settings
from homequote.state import load_state, save_state
from homequote.version import __version__
from ui.calculator import render_calculator_inputs
from ui.dpa import dpa_entries, render_dpa_section
from ui.results import render_results
from ui.sidebar import render_fee_sidebar


def init_state():
    """Load persisted inputs and the rate snapshot once per session."""
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)
    if "state_loaded" not in st.session_state:
        load_state()
        st.session_state["state_loaded"] = True
    if "rates" not in st.session_state:
        st.session_state["rates"] = load_rate_snapshot(settings.rates_file)
    st.session_state.setdefault(
        "calculator", MortgageInputs(county=settings.default_county).model_dump()
    )


def main():
    init_state()
    st.title("Florida Mortgage & DPA Calculator")
    st.caption(f"v{__version__} • Florida closing costs • DPA stacking • CLTV guardrails")

    fees = render_fee_sidebar()
    inputs = render_calculator_inputs(st.session_state["rates"])
    if inputs is None:
        save_state()
        return
    quote = build_quote(inputs, dpa_entries(), fees, st.session_state["discount_points"])
    st.session_state["quote"] = quote.model_dump()
    render_dpa_section(inputs.price, quote.results.base_loan, quote.results.note_rate)
    render_results(quote)
    save_state()


if __name__ == "__main__":
    main()
