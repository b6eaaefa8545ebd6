"""Quote illustration PDF."""
from __future__ import annotations
import io
from xml.sax.saxutils import escape
from typing import Any, Dict

from reportlab.lib import colors
from reportlab.lib.pagesizes import LETTER
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from homequote.dpa import dpa_breakdown
from homequote.presets import DISCLAIMER
from homequote.quote import Quote

_GRID = TableStyle(
    [
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("BOX", (0, 0), (-1, -1), 1, colors.black),
        ("INNERGRID", (0, 0), (-1, -1), 0.5, colors.grey),
    ]
)


def _money(v: float) -> str:
    return f"-${abs(v):,.2f}" if v < 0 else f"${v:,.2f}"


def quote_pdf_data(quote: Quote, branding: Dict[str, str] | None = None) -> Dict[str, Any]:
    """Flatten a quote into the sections rendered by :func:`build_quote_pdf`."""
    i, r = quote.inputs, quote.results
    dpa = dpa_breakdown(quote.dpa_entries, i.price, r.base_loan)
    dpa_rows = [["Program", "Amount", "Payment", "Fees"]] + [
        [row.Name, _money(row.Amount), _money(row.Payment), _money(row.Fees)]
        for row in dpa.itertuples(index=False)
    ]
    return {
        "branding": branding or {},
        "snapshot": {
            "County": f"{i.county}, FL",
            "Sales Price": _money(i.price),
            "Loan Type": i.loan_type,
            "Down Payment": f"{_money(r.actual_down_payment)} ({i.down_pct:g}%)",
            "Total Loan": _money(r.base_loan),
            "Rate / APR": f"{r.note_rate:.3f}% / {r.apr:.3f}%",
            "LTV / CLTV": f"{quote.ltv:.2f}% / {quote.cltv:.2f}%",
        },
        "monthly": {
            "Principal & Interest": _money(r.monthly_pi),
            "Mortgage Insurance": _money(r.monthly_mi),
            "Taxes": _money(r.monthly_tax),
            "Insurance": _money(r.monthly_ins),
            "DPA Payments": _money(quote.total_dpa_payment),
            "Total": _money(quote.monthly_total),
        },
        "cash": {
            "Down Payment": _money(r.actual_down_payment),
            "Closing Costs": _money(r.closing_costs),
            "Intangible Tax": _money(r.intangible),
            "Doc Stamps": _money(r.deed),
            "Prepaids": _money(r.prepaids),
            "Discount Points": _money(quote.discount_points_amount),
            "DPA Credit": _money(-quote.total_dpa),
            "DPA Fees": _money(quote.total_dpa_fees),
            "Seller Credit": _money(-r.seller_credit_amount),
            "Cash to Close": _money(quote.cash_to_close),
        },
        "dpa_rows": dpa_rows if len(dpa_rows) > 1 else [],
        "warnings": [w.model_dump() for w in quote.warnings],
    }


def _kv_table(title: str, values: Dict[str, Any]) -> Table:
    t = Table([[title, ""]] + [[k, f"{v}"] for k, v in values.items()], hAlign="LEFT", colWidths=[200, 320])
    t.setStyle(_GRID)
    return t


def build_quote_pdf(data: Dict[str, Any]) -> bytes:
    """Render the quote sections into a one-page illustration PDF.

    If critical warnings are present an ``override_reason`` is required and
    printed on the document.
    """

    warnings = data.get("warnings", [])
    override_reason = data.get("override_reason")
    if any(w.get("severity") == "critical" for w in warnings) and not override_reason:
        raise ValueError("override_reason required when critical warnings exist")

    styles = getSampleStyleSheet()
    buf = io.BytesIO()
    doc = SimpleDocTemplate(buf, pagesize=LETTER, leftMargin=36, rightMargin=36, topMargin=36, bottomMargin=36)
    branding = data.get("branding", {})
    story = [Paragraph(f"<b>{escape(branding.get('title', 'Mortgage Illustration'))}</b>", styles["Title"]), Spacer(1, 6)]
    if branding.get("mlo"):
        story.append(Paragraph(f"MLO: {escape(str(branding['mlo']))}  |  NMLS: {escape(str(branding.get('nmls', '')))}", styles["Normal"]))
    if branding.get("contact"):
        story.append(Paragraph(f"Contact: {escape(str(branding['contact']))}", styles["Normal"]))
    story.append(Spacer(1, 12))

    for key, title in (("snapshot", "Deal Snapshot"), ("monthly", "Monthly Payment"), ("cash", "Cash to Close")):
        if data.get(key):
            story += [_kv_table(title, data[key]), Spacer(1, 12)]

    if data.get("dpa_rows"):
        t = Table(data["dpa_rows"], hAlign="LEFT")
        t.setStyle(_GRID)
        story += [Paragraph("<b>Down Payment Assistance</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    if warnings:
        rows = [["Code", "Severity", "Message"]] + [
            [w.get("code", ""), w.get("severity", ""), Paragraph(escape(w.get("message", "")), styles["Normal"])]
            for w in warnings
        ]
        t = Table(rows, hAlign="LEFT", colWidths=[150, 60, 310])
        t.setStyle(_GRID)
        story += [Paragraph("<b>Warnings</b>", styles["Heading3"]), Spacer(1, 6), t, Spacer(1, 12)]

    if override_reason:
        story.append(Paragraph(f"Override Reason: {escape(override_reason)}", styles["Normal"]))

    story += [Spacer(1, 12), Paragraph(f"<font size=8>{DISCLAIMER}</font>", styles["Normal"])]
    doc.build(story)
    return buf.getvalue()
