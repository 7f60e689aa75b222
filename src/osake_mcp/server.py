"""Helsinki fundamentals MCP server using FastMCP."""

import json
import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastmcp import FastMCP

from osake_mcp import SCHEMA_VERSION, SERVER_VERSION, config
from osake_mcp.data.cache import record_uri
from osake_mcp.data.fmp_client import shutdown_executor
from osake_mcp.prompts.templates import get_prompt
from osake_mcp.resources.fundamentals_resource import (
    ResourceNotFoundError,
    read_fundamentals_resource,
)
from osake_mcp.tools import (
    benchmark_tables,
    fundamentals_history,
    investability_score,
    normalize_symbol,
    sector_comparison,
)

# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(level=getattr(logging, log_level, logging.INFO))
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[None]:
    """Release the HTTP worker threads when the server stops."""
    try:
        yield
    finally:
        await shutdown_executor()
        logger.info("HTTP executor shut down")


# Create FastMCP server instance
mcp = FastMCP(
    name="osake-analysis",
    lifespan=lifespan,
)


# ============================================================================
# TOOLS
# ============================================================================


@mcp.tool
def normalize_ticker(symbol: str) -> str:
    """
    Convert free-text input into a Helsinki exchange ticker.

    "nokia" -> "NOKIA.HE", "NOKIA.XYZ" -> "NOKIA.HE". Empty input gives "".

    Args:
        symbol: Ticker as typed by the user

    Returns:
        JSON with the canonical ticker and whether static sample data exists for it
    """
    return json.dumps(normalize_symbol(symbol), indent=2, default=str)


@mcp.tool
async def get_fundamentals(symbol: str) -> str:
    """
    Get up to five years of normalized fundamentals for a Helsinki stock.

    Per year: P/E, PEG, P/B, P/FCF, EPS, ROE-%, EBIT-%, dividend yield and
    per share, equity ratio, net debt ratio, revenue (M€) and growth rates.
    Missing values are null, never 0.

    Args:
        symbol: Stock ticker (e.g. NOKIA, SAMPO.HE)

    Returns:
        JSON with company info, yearly rows (oldest first) and data provenance
    """
    result = await fundamentals_history(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def get_score(symbol: str) -> str:
    """
    Compute the investability score (0-100) for a Helsinki stock.

    Categories: valuation 30% (arvostus), quality 30% (laatu),
    growth 20% (kasvu), solvency 20% (vakavaraisuus).

    Args:
        symbol: Stock ticker

    Returns:
        JSON with category scores, bands, the weighted total and its rating
    """
    result = await investability_score(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
async def compare_sector(symbol: str) -> str:
    """
    Compare a Helsinki stock's latest year with its sector average.

    Args:
        symbol: Stock ticker

    Returns:
        JSON with per-metric comparisons and a P/E ladder including the market average
    """
    result = await sector_comparison(symbol=symbol)
    return json.dumps(result, indent=2, default=str)


@mcp.tool
def get_benchmarks() -> str:
    """
    Get the static sector and Helsinki market benchmark tables.

    Returns:
        JSON with sector averages and the market average
    """
    return json.dumps(benchmark_tables(), indent=2, default=str)


# ============================================================================
# RESOURCES
# ============================================================================


@mcp.resource("fundamentals://{ticker}")
def get_fundamentals_csv(ticker: str) -> str:
    """
    Get the yearly fundamentals table as CSV.

    Live data must be loaded with get_fundamentals first; static sample
    tickers are always available.

    Args:
        ticker: Stock ticker

    Returns:
        CSV with one row per fiscal year
    """
    try:
        csv_text, _ = read_fundamentals_resource(record_uri(ticker))
        return csv_text
    except ResourceNotFoundError:
        return f"Resource not cached. Call get_fundamentals('{ticker}') first."


# ============================================================================
# PROMPTS
# ============================================================================


@mcp.prompt
def investability_memo(symbol: str) -> str:
    """Investability memo for a Helsinki-listed stock."""
    result = get_prompt("investability_memo", {"symbol": symbol})
    if result:
        return result["messages"][0]["content"]
    return f"Score {symbol} using get_score."


@mcp.prompt
def sector_memo(symbol: str) -> str:
    """How a Helsinki stock stacks up against its sector."""
    result = get_prompt("sector_memo", {"symbol": symbol})
    if result:
        return result["messages"][0]["content"]
    return f"Compare {symbol} with its sector using compare_sector."


# ============================================================================
# ENTRY POINT
# ============================================================================


def main() -> None:
    """Run the MCP server."""
    mode = "live (FMP)" if config.has_api_key() else "offline (static sample data)"
    logger.info(
        f"Starting Osake MCP Server v{SERVER_VERSION} (schema v{SCHEMA_VERSION}), {mode}"
    )
    mcp.run()


if __name__ == "__main__":
    main()
