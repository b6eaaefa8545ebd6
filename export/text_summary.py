"""Plain-text quote illustration for texting to a borrower."""
from __future__ import annotations
from typing import Callable, Iterable

from homequote.dpa import DPAEntry, calculate_dpa_amount, calculate_dpa_payment
from homequote.presets import DISCLAIMER
from homequote.quote import Quote


def fmt_currency(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def fmt_currency_detailed(value: float) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_dpa_for_text(
    entries: Iterable[DPAEntry],
    sales_price: float,
    loan_amount: float,
    format_currency: Callable[[float], str] = fmt_currency,
) -> str:
    """One bullet per DPA entry with its amount and any monthly payment."""
    lines = []
    for e in entries:
        amount = calculate_dpa_amount(e, sales_price, loan_amount)
        payment = calculate_dpa_payment(e, amount)
        line = f"• {e.name or 'DPA'}: {format_currency(amount)}"
        if payment > 0:
            line += f" ({format_currency(payment)}/mo)"
        lines.append(line)
    if not lines:
        return ""
    return "\n" + "\n".join(lines)


def build_illustration_text(quote: Quote) -> str:
    """Render the quote as the message body sent from the calculator."""
    i, r = quote.inputs, quote.results
    program = i.loan_type
    if quote.dpa_entries:
        program += " + " + ", ".join(e.name or "DPA" for e in quote.dpa_entries)

    loan_lines = [f"• Base Loan: {fmt_currency(r.base_loan_before_fee)}"]
    if r.financed_fee > 0:
        label = "UFMIP (1.75%)" if i.loan_type == "FHA" else f"VA Funding Fee ({r.fee_rate * 100:.2f}%)"
        loan_lines.append(f"• {label}: {fmt_currency(r.financed_fee)} (financed)")
        loan_lines.append(f"• Total Loan: {fmt_currency(r.base_loan)}")

    payment_lines = [
        f"• P&I: {fmt_currency(r.monthly_pi)}",
        f"• Taxes: {fmt_currency(r.monthly_tax)}",
        f"• Insurance: {fmt_currency(r.monthly_ins)}",
    ]
    if r.monthly_mi > 0:
        payment_lines.append(f"• MI: {fmt_currency(r.monthly_mi)}")
    if quote.total_dpa_payment > 0:
        payment_lines.append(f"• DPA Payment: {fmt_currency(quote.total_dpa_payment)}")

    cash_lines = [
        f"• Down Payment: {fmt_currency(r.actual_down_payment)}",
        f"• Closing Costs: {fmt_currency(r.closing_costs)}",
        f"• Prepaids: {fmt_currency(r.prepaids)}",
    ]
    if quote.discount_points_amount > 0:
        cash_lines.append(
            f"• Discount Points ({quote.discount_points_pct:g}%): {fmt_currency(quote.discount_points_amount)}"
        )
    if quote.total_dpa > 0:
        cash_lines.append(f"• DPA Credit: -{fmt_currency(quote.total_dpa)}")
    if quote.total_dpa_fees > 0:
        cash_lines.append(f"• DPA Fees: {fmt_currency(quote.total_dpa_fees)}")
    if r.seller_credit_amount > 0:
        cash_lines.append(f"• Seller Credit: -{fmt_currency(r.seller_credit_amount)}")

    sections = [
        "Hi,",
        "Mortgage Illustration",
        "\n".join(
            [
                f"{i.county} County, FL",
                f"Sales Price: {fmt_currency(i.price)}",
                f"Down Payment: {fmt_currency(r.actual_down_payment)} ({i.down_pct:g}%)",
            ]
        ),
        "\n".join(
            [
                "Loan Details",
                f"• Type: {program}",
                f"• Term: {i.term_years} years",
                f"• Rate: {r.note_rate:.3f}% | APR: {r.apr:.3f}%",
            ]
            + loan_lines
        ),
        "\n".join([f"Monthly Payment: {fmt_currency_detailed(quote.monthly_total)}"] + payment_lines),
        "\n".join([f"Cash to Close: {fmt_currency_detailed(quote.cash_to_close)}"] + cash_lines),
    ]
    if quote.dpa_entries:
        sections.append(
            "Down Payment Assistance"
            + format_dpa_for_text(quote.dpa_entries, i.price, r.base_loan)
        )
    sections.append(DISCLAIMER)
    return "\n\n".join(sections)
