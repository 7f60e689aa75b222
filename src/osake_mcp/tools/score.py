"""Investability score tool."""

from time import perf_counter
from typing import Any

from osake_mcp.engine.errors import DataUnavailable, InsufficientData
from osake_mcp.engine.scoring import (
    CATEGORY_LABELS,
    CATEGORY_WEIGHTS,
    score,
    score_band,
    score_label,
)
from osake_mcp.tools.fundamentals import load_security
from osake_mcp.utils.provenance import build_error_response, build_meta


async def investability_score(symbol: str) -> dict[str, Any]:
    """
    Score a Helsinki stock on valuation, quality, growth and solvency.

    Args:
        symbol: Stock ticker

    Returns:
        Dict with per-category scores, weights, bands and the weighted total
    """
    start_time = perf_counter()

    try:
        record, provenance = await load_security(symbol)
    except DataUnavailable as e:
        return build_error_response(
            error_type="data_unavailable",
            message=str(e),
            symbol=symbol,
        )

    try:
        scores = score(record)
    except InsufficientData as e:
        return build_error_response(
            error_type="insufficient_data",
            message=str(e),
            symbol=record.ticker,
        )

    values = scores.to_dict()
    categories = {
        key: {
            "score": values[key],
            "label": CATEGORY_LABELS[key]["label"],
            "inputs": CATEGORY_LABELS[key]["inputs"],
            "weight": CATEGORY_WEIGHTS[key],
            "band": score_band(values[key]),
        }
        for key in CATEGORY_WEIGHTS
    }

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("investability_score", duration_ms),
        "data_provenance": {"fundamentals": provenance},
        "symbol": record.ticker,
        "name": record.name,
        "sector": record.sector,
        "scored_year": record.latest_year,
        "categories": categories,
        "total": scores.total,
        "rating": score_label(scores.total),
    }
