"""Sector comparison and benchmark table tools."""

from time import perf_counter
from typing import Any

from osake_mcp.engine.benchmarks import (
    MARKET_BENCHMARK,
    SECTOR_BENCHMARKS,
    compare_to_sector,
    resolve_sector,
)
from osake_mcp.engine.errors import DataUnavailable
from osake_mcp.tools.fundamentals import load_security
from osake_mcp.utils.provenance import build_error_response, build_meta


async def sector_comparison(symbol: str) -> dict[str, Any]:
    """
    Compare a stock's latest year against its sector and the market.

    Args:
        symbol: Stock ticker

    Returns:
        Dict with per-metric comparisons and a P/E ladder (stock, sector, market)
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

    benchmark_sector = resolve_sector(record.sector)
    benchmark = SECTOR_BENCHMARKS[benchmark_sector]
    comparisons = compare_to_sector(record, benchmark)

    latest = record.latest
    stock_pe = latest.pe if latest is not None else None
    pe_below_sector = (
        stock_pe < benchmark.pe if stock_pe is not None and benchmark.pe is not None else None
    )

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("sector_comparison", duration_ms),
        "data_provenance": {"fundamentals": provenance},
        "symbol": record.ticker,
        "name": record.name,
        "sector": record.sector,
        "benchmark_sector": benchmark_sector,
        "compared_year": record.latest_year,
        "comparisons": [c.to_dict() for c in comparisons],
        "better_count": sum(1 for c in comparisons if c.better),
        "pe_ladder": {
            "stock": stock_pe,
            "sector": benchmark.pe,
            "market": MARKET_BENCHMARK.pe,
            "below_sector": pe_below_sector,
        },
    }


def benchmark_tables() -> dict[str, Any]:
    """Static sector and market averages."""
    return {
        "meta": build_meta("benchmark_tables"),
        "sectors": {name: bench.to_dict() for name, bench in SECTOR_BENCHMARKS.items()},
        "market": MARKET_BENCHMARK.to_dict(),
    }
