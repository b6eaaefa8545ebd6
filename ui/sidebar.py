import json

import streamlit as st
from pydantic import ValidationError

from homequote.models import DEFAULT_FEES, ClosingCostFees


def render_fee_sidebar() -> ClosingCostFees:
    """Sidebar with the editable closing-cost fee schedule and discount points."""
    st.session_state.setdefault("closing_fees", DEFAULT_FEES.model_dump())
    st.session_state.setdefault("discount_points", 0.0)

    st.sidebar.header("Closing Costs")
    fees_json = st.sidebar.text_area(
        "Closing Cost Fees",
        value=json.dumps(st.session_state["closing_fees"], indent=2),
        height=320,
    )
    try:
        fees = ClosingCostFees(**json.loads(fees_json))
        st.session_state["closing_fees"] = fees.model_dump()
    except (json.JSONDecodeError, TypeError, ValidationError):
        st.sidebar.error("Fee table is not valid JSON of dollar amounts; keeping the previous schedule.")
        fees = ClosingCostFees(**st.session_state["closing_fees"])

    st.session_state["discount_points"] = st.sidebar.number_input(
        "Discount Points %",
        value=float(st.session_state["discount_points"]),
        step=0.125,
        format="%.3f",
    )
    return fees
