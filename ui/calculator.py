import streamlit as st
from pydantic import ValidationError

from homequote.models import MortgageInputs
from homequote.presets import CREDIT_BANDS, FLORIDA_COUNTIES, LOAN_TYPES, MIN_DOWN_BY_LOAN
from homequote.rates import get_rate_for_loan_type

TERMS = (30, 25, 20, 15, 10)
VA_USAGE_LABELS = {
    "firstUse": "First use",
    "subsequentUse": "Subsequent use",
    "exempt": "Exempt (disability)",
}


def _index(options, value, default=0):
    try:
        return list(options).index(value)
    except ValueError:
        return default


def render_calculator_inputs(rates=None):
    """Render the scenario inputs and return validated ``MortgageInputs``.

    When no custom rate is entered the live rate for the loan type is filled
    in from ``rates``.  Returns ``None`` if the inputs do not validate.
    """
    st.session_state.setdefault("calculator", MortgageInputs().model_dump())
    c = st.session_state.calculator
    with st.expander("Loan Scenario", expanded=True):
        c["price"] = st.number_input("Sales Price", value=float(c.get("price", 0.0)), step=5000.0)
        previous_type = c.get("loan_type")
        c["loan_type"] = st.selectbox(
            "Loan Type", LOAN_TYPES, index=_index(LOAN_TYPES, previous_type)
        )
        min_down = MIN_DOWN_BY_LOAN[c["loan_type"]]
        if c["loan_type"] != previous_type:
            c["down_pct"] = min_down
        # The engine does not enforce the program minimum; the form does.
        down = min(max(float(c.get("down_pct", min_down)), min_down), 100.0)
        c["down_pct"] = st.number_input(
            "Down Payment %",
            min_value=float(min_down),
            max_value=100.0,
            value=down,
            step=0.5,
            help=f"{c['loan_type']} minimum is {min_down:g}%",
        )
        c["term_years"] = st.selectbox(
            "Term (years)", TERMS, index=_index(TERMS, int(c.get("term_years", 30)))
        )
        c["credit_band"] = st.selectbox(
            "Credit Score", CREDIT_BANDS, index=_index(CREDIT_BANDS, c.get("credit_band"), 1)
        )
        c["county"] = st.selectbox(
            "County", FLORIDA_COUNTIES, index=_index(FLORIDA_COUNTIES, c.get("county"))
        )
        c["annual_tax"] = st.number_input(
            "Annual Property Tax", value=float(c.get("annual_tax", 0.0)), step=100.0
        )
        c["annual_ins"] = st.number_input(
            "Annual Homeowners Insurance", value=float(c.get("annual_ins", 0.0)), step=100.0
        )
        c["buyer_pays_seller_transfer"] = st.checkbox(
            "Buyer pays seller transfer tax",
            value=bool(c.get("buyer_pays_seller_transfer", False)),
        )
        if c["loan_type"] == "VA":
            usages = list(VA_USAGE_LABELS)
            c["va_loan_usage"] = st.selectbox(
                "VA Loan Usage",
                usages,
                index=_index(usages, c.get("va_loan_usage")),
                format_func=VA_USAGE_LABELS.get,
            )
        c["seller_credit_type"] = st.radio(
            "Seller Credit Type",
            ("percentage", "dollar"),
            index=0 if c.get("seller_credit_type", "percentage") == "percentage" else 1,
            horizontal=True,
        )
        c["seller_credit"] = st.number_input(
            "Seller Credit", value=float(c.get("seller_credit", 0.0)), step=0.5
        )
        live_rate = get_rate_for_loan_type(rates, c["loan_type"])
        custom = st.number_input(
            "Custom Rate %",
            value=float(c.get("custom_rate") or 0.0),
            step=0.125,
            format="%.3f",
            help="Leave at 0 to use the live rate",
        )
        c["custom_rate"] = custom if custom > 0 else None
        st.caption(f"Live {c['loan_type']} rate: {live_rate:.3f}%")

    try:
        inputs = MortgageInputs(**c)
    except ValidationError as exc:
        st.error(f"Check the scenario inputs: {exc.errors()[0]['msg']}")
        return None
    st.session_state.calculator = inputs.model_dump()
    if inputs.custom_rate is None:
        inputs = inputs.model_copy(update={"custom_rate": live_rate})
    return inputs
