from __future__ import annotations
from typing import Literal, List, Dict, Any
from pydantic import BaseModel, Field

from homequote.presets import MAX_CLTV, MAX_LTV_BY_LOAN, MIN_DOWN_BY_LOAN


class RuleResult(BaseModel):
    code: str
    severity: Literal["info", "warn", "critical"]
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)


def evaluate_rules(state: dict) -> List[RuleResult]:
    res: List[RuleResult] = []

    price = float(state.get("price", 0.0))
    loan_type = state.get("loan_type", "Conventional")

    if price <= 0:
        res.append(
            RuleResult(
                code="NO_PRICE",
                severity="critical",
                message="No purchase price entered; quote figures are not meaningful.",
            )
        )
        return res

    down_pct = float(state.get("down_pct", 0.0))
    min_down = MIN_DOWN_BY_LOAN.get(loan_type, 0.0)
    if down_pct < min_down:
        res.append(
            RuleResult(
                code="DOWN_BELOW_MINIMUM",
                severity="warn",
                message=f"Down payment is below the {loan_type} minimum of {min_down:g}%.",
                context={"actual": down_pct, "minimum": min_down},
            )
        )

    cltv = float(state.get("cltv", 0.0))
    if cltv > MAX_CLTV:
        res.append(
            RuleResult(
                code="CLTV_OVER_LIMIT",
                severity="critical",
                message=f"CLTV ({cltv:.1f}%) exceeds {MAX_CLTV:g}% maximum. Reduce DPA or increase down payment.",
                context={"actual": cltv, "limit": MAX_CLTV},
            )
        )

    ltv = float(state.get("ltv", 0.0))
    max_ltv = MAX_LTV_BY_LOAN.get(loan_type)
    if max_ltv is not None and ltv > max_ltv:
        res.append(
            RuleResult(
                code="LTV_OVER_PROGRAM_MAX",
                severity="warn",
                message=f"LTV ({ltv:.1f}%) exceeds {loan_type} maximum of {max_ltv:g}%.",
                context={"actual": ltv, "limit": max_ltv},
            )
        )

    cash = float(state.get("cash_to_close", 0.0))
    if cash < 0:
        res.append(
            RuleResult(
                code="NEGATIVE_CASH_TO_CLOSE",
                severity="warn",
                message="Cash to close is negative; assistance and credits exceed what is needed.",
                context={
                    "cash_to_close": cash,
                    "suggested_down_pct": state.get("suggested_down_pct"),
                },
            )
        )

    if not state.get("apr_converged", True):
        res.append(
            RuleResult(
                code="APR_FALLBACK",
                severity="info",
                message="APR could not be solved; showing the note rate instead.",
            )
        )

    if state.get("tax_waived", False):
        res.append(
            RuleResult(
                code="DPA_TAX_WAIVER",
                severity="info",
                message="Intangible tax and doc stamps waived for the selected assistance program.",
            )
        )

    return res


def has_blocking(res: List[RuleResult]) -> bool:
    return any(r.severity == "critical" for r in res)
