"""Fundamentals and scoring tools."""

from osake_mcp.tools.comparison import benchmark_tables, sector_comparison
from osake_mcp.tools.fundamentals import fundamentals_history, load_security
from osake_mcp.tools.score import investability_score
from osake_mcp.tools.ticker import normalize_symbol

__all__ = [
    "benchmark_tables",
    "fundamentals_history",
    "investability_score",
    "load_security",
    "normalize_symbol",
    "sector_comparison",
]
