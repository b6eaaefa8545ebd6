"""Note-rate snapshots supplied by the rate quote service."""

from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from homequote.presets import RATE_BY_LOAN

logger = logging.getLogger(__name__)


class RateQuote(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    note_rate: float = Field(alias="noteRate")
    apr: Optional[float] = None

    @model_validator(mode="after")
    def _default_apr(self):
        if not self.apr:
            self.apr = self.note_rate
        return self


class RateSnapshot(BaseModel):
    """Response shape of the rate service (camelCase keys accepted)."""

    model_config = ConfigDict(populate_by_name=True)

    updated_at: str = Field(default="", alias="updatedAt")
    conventional30: RateQuote
    fha30: RateQuote
    va30: RateQuote


FALLBACK_RATES = RateSnapshot(
    conventional30=RateQuote(note_rate=RATE_BY_LOAN["Conventional"]),
    fha30=RateQuote(note_rate=RATE_BY_LOAN["FHA"]),
    va30=RateQuote(note_rate=RATE_BY_LOAN["VA"]),
)


def get_rate_for_loan_type(rates: Optional[RateSnapshot], loan_type) -> float:
    """Note rate for ``loan_type``; DSCR prices off the conventional rate."""

    if rates is None:
        return RATE_BY_LOAN.get(loan_type, RATE_BY_LOAN["DSCR"])
    if loan_type == "FHA":
        return rates.fha30.note_rate
    if loan_type == "VA":
        return rates.va30.note_rate
    return rates.conventional30.note_rate


def load_rate_snapshot(path) -> RateSnapshot:
    """Read a cached snapshot, falling back to static rates when unusable."""

    if not path:
        return FALLBACK_RATES
    p = Path(path)
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
        return RateSnapshot.model_validate(data)
    except FileNotFoundError:
        logger.info("rate_snapshot_missing path=%s", p, extra={"event": "rate_snapshot_missing"})
    except (json.JSONDecodeError, ValidationError) as exc:
        logger.warning(
            "rate_snapshot_invalid path=%s error=%s",
            p,
            exc,
            extra={
                "event": "rate_snapshot_invalid",
                "error_type": type(exc).__name__,
                "error_message": str(exc),
            },
        )
    return FALLBACK_RATES
