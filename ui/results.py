import streamlit as st

from export.pdf_export import build_quote_pdf, quote_pdf_data
from export.text_summary import build_illustration_text
from homequote.calculators import amortization_schedule
from homequote.dpa import dpa_breakdown
from homequote.quote import Quote
from homequote.rules import has_blocking


def render_warnings(quote: Quote):
    for r in quote.warnings:
        if r.severity == "critical":
            st.error(f"[{r.code}] {r.message}")
        elif r.severity == "warn":
            st.warning(f"[{r.code}] {r.message}")
        else:
            st.info(f"[{r.code}] {r.message}")


def render_results(quote: Quote):
    """Payment, cash-to-close and breakdowns for the current quote."""
    i, r = quote.inputs, quote.results
    cols = st.columns(4)
    label = "Monthly Payment (incl. DPA)" if quote.total_dpa_payment > 0 else "Monthly Payment"
    cols[0].metric(label, f"${quote.monthly_total:,.2f}")
    cols[1].metric("Cash to Close", f"${quote.cash_to_close:,.2f}")
    cols[2].metric("Rate / APR", f"{r.note_rate:.3f}% / {r.apr:.3f}%")
    cols[3].metric("LTV / CLTV", f"{quote.ltv:.1f}% / {quote.cltv:.1f}%")

    if r.financed_fee > 0:
        st.caption(
            f"Base Loan: ${r.base_loan_before_fee:,.0f} • Financed Fee ({r.fee_rate * 100:.2f}%): "
            f"${r.financed_fee:,.0f} • Total Loan: ${r.base_loan:,.0f}"
        )
    else:
        st.caption(f"Base Loan: ${r.base_loan:,.0f}")
    st.caption(
        f"P&I ${r.monthly_pi:,.2f} • MI ({r.mi_rate_pct:.2f}%) ${r.monthly_mi:,.2f} • "
        f"Taxes ${r.monthly_tax:,.2f} • Insurance ${r.monthly_ins:,.2f}"
    )
    render_warnings(quote)

    with st.expander("Closing Costs"):
        st.write(f"Lender's Title: ${r.lenders_title:,.2f} (buyer side ${r.lenders_title_buyer_side:,.2f})")
        st.write(f"Intangible Tax: ${r.intangible:,.2f}")
        st.write(f"Doc Stamps: ${r.deed:,.2f}")
        st.write(f"Total Closing Costs: ${r.closing_costs:,.2f}")
    with st.expander("Prepaids"):
        st.write(f"Taxes (3 months): ${r.prepaid_taxes:,.2f}")
        st.write(f"Insurance (15 months): ${r.prepaid_insurance:,.2f}")
        st.write(f"Interest (15 days): ${r.prepaid_interest:,.2f}")
        st.write(f"Total Prepaids: ${r.prepaids:,.2f}")
    if quote.dpa_entries:
        with st.expander("Assistance Breakdown"):
            st.dataframe(dpa_breakdown(quote.dpa_entries, i.price, r.base_loan), hide_index=True)
    with st.expander("Amortization Schedule"):
        st.dataframe(amortization_schedule(r.base_loan, r.note_rate, i.term_years * 12), hide_index=True)

    st.subheader("Share")
    st.text_area("Text Message", value=build_illustration_text(quote), height=360)
    override = ""
    if has_blocking(quote.warnings):
        override = st.text_input("Override reason (required for PDF with critical warnings)")
    if not has_blocking(quote.warnings) or override:
        data = quote_pdf_data(quote)
        data["override_reason"] = override
        st.download_button(
            "Download PDF",
            data=build_quote_pdf(data),
            file_name="mortgage_illustration.pdf",
            mime="application/pdf",
        )
