"""Investability score: four category scores and a weighted total."""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from osake_mcp.engine.errors import InsufficientData
from osake_mcp.engine.models import ScoreSet, SecurityRecord
from osake_mcp.utils.numbers import is_missing, round_half_up


@dataclass(frozen=True)
class Scale:
    """
    Linear mapping of a raw metric onto 0..100.

    ``anchor`` is the ceiling for lower-is-better metrics and the floor for
    higher-is-better ones.
    """

    anchor: float
    span: float
    lower_is_better: bool = False

    def normalize(self, value: float | None) -> float:
        """Clamp-normalized sub-score. Missing values score 0."""
        if is_missing(value):
            return 0.0
        if self.lower_is_better:
            fraction = (self.anchor - value) / self.span
        else:
            fraction = (value - self.anchor) / self.span
        if math.isnan(fraction):
            return 0.0
        return max(0.0, min(1.0, fraction)) * 100


# Valuation
PE_SCALE = Scale(anchor=25, span=20, lower_is_better=True)
PEG_SCALE = Scale(anchor=3, span=2.5, lower_is_better=True)
PB_SCALE = Scale(anchor=5, span=4.5, lower_is_better=True)
PFCF_SCALE = Scale(anchor=30, span=25, lower_is_better=True)

# Quality
ROE_SCALE = Scale(anchor=0, span=30)
EBIT_SCALE = Scale(anchor=0, span=22)

# Growth (multi-year averages)
REVENUE_GROWTH_SCALE = Scale(anchor=-5, span=20)
EARNINGS_GROWTH_SCALE = Scale(anchor=-5, span=40)

# Solvency
EQUITY_RATIO_SCALE = Scale(anchor=0, span=60)
NET_DEBT_SCALE = Scale(anchor=60, span=60, lower_is_better=True)
DIVIDEND_YIELD_SCALE = Scale(anchor=0, span=7)

CATEGORY_WEIGHTS = {
    "valuation": 0.30,
    "quality": 0.30,
    "growth": 0.20,
    "solvency": 0.20,
}

# Display labels (Finnish) and what goes into each category
CATEGORY_LABELS = {
    "valuation": {"label": "Arvostus", "inputs": "P/E, PEG, P/B, P/FCF"},
    "quality": {"label": "Laatu", "inputs": "ROE, EBIT-%"},
    "growth": {"label": "Kasvu", "inputs": "Liikevaihto, EPS"},
    "solvency": {"label": "Vakavaraisuus", "inputs": "Omavaraisuus, Nettovelkaantuminen"},
}


def score(record: SecurityRecord) -> ScoreSet:
    """
    Score the latest fiscal year of a record.

    Args:
        record: Aggregated or fallback security record

    Returns:
        ScoreSet with integer scores in [0, 100]

    Raises:
        InsufficientData: If the record has no years
    """
    if not record.years:
        raise InsufficientData(f"No fiscal years to score for {record.ticker or 'record'}")

    latest = record.years[max(record.years)]

    valuation = round_half_up(
        PE_SCALE.normalize(latest.pe) * 0.30
        + PEG_SCALE.normalize(record.peg_ratio) * 0.20
        + PB_SCALE.normalize(latest.pb) * 0.25
        + PFCF_SCALE.normalize(latest.pfcf) * 0.25
    )

    quality = round_half_up(
        ROE_SCALE.normalize(latest.roe) * 0.55
        + EBIT_SCALE.normalize(latest.ebit) * 0.45
    )

    years = list(record.years.values())
    avg_revenue_growth = _mean_or_floor((y.revenue_growth for y in years), REVENUE_GROWTH_SCALE)
    avg_earnings_growth = _mean_or_floor((y.earnings_growth for y in years), EARNINGS_GROWTH_SCALE)
    growth = round_half_up(
        REVENUE_GROWTH_SCALE.normalize(avg_revenue_growth) * 0.5
        + EARNINGS_GROWTH_SCALE.normalize(avg_earnings_growth) * 0.5
    )

    net_debt = None if is_missing(latest.nettovelka) else max(0.0, latest.nettovelka)
    solvency = round_half_up(
        EQUITY_RATIO_SCALE.normalize(latest.eq) * 0.40
        + NET_DEBT_SCALE.normalize(net_debt) * 0.35
        + DIVIDEND_YIELD_SCALE.normalize(latest.dy) * 0.25
    )

    total = round_half_up(
        valuation * CATEGORY_WEIGHTS["valuation"]
        + quality * CATEGORY_WEIGHTS["quality"]
        + growth * CATEGORY_WEIGHTS["growth"]
        + solvency * CATEGORY_WEIGHTS["solvency"]
    )

    return ScoreSet(
        valuation=valuation,
        quality=quality,
        growth=growth,
        solvency=solvency,
        total=total,
    )


def score_label(total: int) -> str:
    """Verbal rating for the composite score."""
    if total >= 70:
        return "Vahva"
    if total >= 55:
        return "Hyvä"
    if total >= 40:
        return "Neutraali"
    return "Heikko"


def score_band(value: int) -> str:
    """Traffic-light band for a category score."""
    if value >= 70:
        return "good"
    if value >= 45:
        return "warn"
    return "bad"


def _mean_or_floor(values: Iterable[float | None], scale: Scale) -> float:
    # Every year counts; a missing value enters at the floor
    filled = [scale.anchor if is_missing(v) else v for v in values]
    return sum(filled) / len(filled)
