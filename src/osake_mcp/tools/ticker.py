"""Ticker normalization tool."""

from typing import Any

from osake_mcp.engine.fallback import FALLBACK_RECORDS
from osake_mcp.engine.ticker import normalize
from osake_mcp.utils.provenance import build_meta


def normalize_symbol(raw: str) -> dict[str, Any]:
    """
    Canonicalize user input into a Helsinki ticker.

    Args:
        raw: Free-text symbol

    Returns:
        Dict with the canonical ticker and whether static data exists for it
    """
    ticker = normalize(raw)
    return {
        "meta": build_meta("normalize_symbol"),
        "input": raw,
        "ticker": ticker,
        "is_empty": ticker == "",
        "in_static_set": ticker in FALLBACK_RECORDS,
    }
