import streamlit as st

from homequote.dpa import (
    DPA_PRESETS,
    DPAEntry,
    calculate_dpa_amount,
    calculate_dpa_payment,
    create_empty_dpa,
    find_preset,
)
from homequote.presets import MAX_CLTV
from homequote.quote import remove_dpa_entry, save_dpa_entry

VALUE_TYPE_LABELS = {"salesPrice": "% of Sales Price", "loanAmount": "% of Loan Amount", "fixed": "Fixed $"}
PAYMENT_TYPE_LABELS = {
    "none": "No payment (forgivable/deferred)",
    "fixed": "Fixed monthly payment",
    "loanPI": "Amortizing (P&I)",
    "loanIO": "Interest only",
}


def dpa_entries():
    return [DPAEntry(**e) for e in st.session_state.get("dpa_entries", [])]


def _store(entries):
    st.session_state["dpa_entries"] = [e.model_dump() for e in entries]


def _save_entry(entry: DPAEntry):
    calc = st.session_state.calculator
    updated, adjustment = save_dpa_entry(
        dpa_entries(), entry, calc["price"], calc["down_pct"], calc["loan_type"]
    )
    _store(updated)
    st.session_state.pop("dpa_editing", None)
    if adjustment.adjusted:
        calc["down_pct"] = adjustment.down_pct
        st.session_state["dpa_notice"] = (
            f"Down payment raised to {adjustment.down_pct:.1f}% to keep CLTV within {MAX_CLTV:g}%."
        )
    st.rerun()


def _entry_form(entry: DPAEntry, note_rate: float):
    values = list(VALUE_TYPE_LABELS)
    payments = list(PAYMENT_TYPE_LABELS)
    with st.form("dpa_form"):
        name = st.text_input("Program Name", value=entry.name)
        value_type = st.selectbox(
            "Amount Type", values, index=values.index(entry.type), format_func=VALUE_TYPE_LABELS.get
        )
        value = st.number_input("Amount", value=float(entry.value), step=0.5)
        payment_type = st.selectbox(
            "Payment Type",
            payments,
            index=payments.index(entry.payment_type),
            format_func=PAYMENT_TYPE_LABELS.get,
        )
        rate = st.number_input(
            "Rate %", value=float(entry.rate or note_rate), step=0.125, format="%.3f"
        )
        term = st.number_input("Term (months)", value=int(entry.term), step=12)
        fixed_payment = st.number_input("Fixed Payment", value=float(entry.fixed_payment), step=10.0)
        fees = st.number_input("Program Fees", value=float(entry.fees), step=25.0)
        label = "Update DPA Program" if entry.name else "Add DPA Program"
        if st.form_submit_button(label):
            return entry.model_copy(
                update={
                    "name": name.strip(),
                    "type": value_type,
                    "value": value,
                    "payment_type": payment_type,
                    "rate": rate if payment_type in ("loanPI", "loanIO") else 0.0,
                    "term": int(term),
                    "fixed_payment": fixed_payment,
                    "fees": fees,
                }
            )
    return None


def render_dpa_section(price: float, base_loan: float, note_rate: float):
    """List, add, edit and remove DPA programs for the current scenario."""
    st.subheader("Down Payment Assistance")
    notice = st.session_state.pop("dpa_notice", None)
    if notice:
        st.info(notice)

    entries = dpa_entries()
    for idx, e in enumerate(entries, start=1):
        amount = calculate_dpa_amount(e, price, base_loan)
        payment = calculate_dpa_payment(e, amount)
        left, mid, right = st.columns([4, 1, 1])
        text = f"**{e.name or f'DPA Program {idx}'}**: ${amount:,.0f}"
        if payment > 0:
            text += f" • Payment: ${payment:,.2f}/mo"
        if e.fees > 0:
            text += f" • Fees: ${e.fees:,.0f}"
        left.markdown(text)
        if mid.button("Edit", key=f"edit_dpa_{e.id}"):
            st.session_state["dpa_editing"] = e.id
            st.rerun()
        if right.button("Remove", key=f"remove_dpa_{e.id}"):
            _store(remove_dpa_entry(entries, e.id))
            st.rerun()

    editing = next((e for e in entries if e.id == st.session_state.get("dpa_editing")), None)
    if editing is not None:
        updated = _entry_form(editing, note_rate)
        if updated is not None:
            _save_entry(updated)
        return

    choice = st.selectbox("Add Program", ["Custom"] + [p.label for p in DPA_PRESETS], key="dpa_preset")
    if choice == "Custom":
        entry = _entry_form(create_empty_dpa(), note_rate)
        if entry is not None:
            _save_entry(entry)
    elif st.button("Add DPA Program", key="add_dpa"):
        _save_entry(find_preset(choice).build(note_rate))
