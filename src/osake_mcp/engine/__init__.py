"""Normalization and scoring engine."""

from osake_mcp.engine.aggregator import FundamentalsSource, aggregate, build_security_record
from osake_mcp.engine.alignment import (
    AlignedRows,
    AlignmentStrategy,
    PositionalAlignment,
    ReportingYearAlignment,
)
from osake_mcp.engine.benchmarks import (
    MARKET_BENCHMARK,
    SECTOR_BENCHMARKS,
    compare_to_sector,
    sector_benchmark,
)
from osake_mcp.engine.errors import DataUnavailable, InsufficientData, OsakeError, SourceError
from osake_mcp.engine.fallback import FALLBACK_RECORDS, default_fallback, fallback_record
from osake_mcp.engine.models import (
    Benchmark,
    MetricComparison,
    ScoreSet,
    SecurityRecord,
    YearRecord,
)
from osake_mcp.engine.scoring import score, score_band, score_label
from osake_mcp.engine.ticker import normalize

__all__ = [
    # Ticker
    "normalize",
    # Aggregation
    "FundamentalsSource",
    "aggregate",
    "build_security_record",
    "AlignedRows",
    "AlignmentStrategy",
    "PositionalAlignment",
    "ReportingYearAlignment",
    # Scoring
    "score",
    "score_band",
    "score_label",
    # Benchmarks and fallback data
    "MARKET_BENCHMARK",
    "SECTOR_BENCHMARKS",
    "compare_to_sector",
    "sector_benchmark",
    "FALLBACK_RECORDS",
    "default_fallback",
    "fallback_record",
    # Models
    "Benchmark",
    "MetricComparison",
    "ScoreSet",
    "SecurityRecord",
    "YearRecord",
    # Errors
    "OsakeError",
    "DataUnavailable",
    "SourceError",
    "InsufficientData",
]
