"""Fundamentals history tool and the live-or-fallback loading policy."""

import logging
from datetime import datetime
from time import perf_counter
from typing import Any

from osake_mcp import config
from osake_mcp.data.cache import record_cache, record_uri
from osake_mcp.data.fmp_client import FMPSource
from osake_mcp.engine.aggregator import FundamentalsSource, aggregate
from osake_mcp.engine.errors import DataUnavailable, OsakeError
from osake_mcp.engine.fallback import default_fallback, fallback_record
from osake_mcp.engine.models import SecurityRecord
from osake_mcp.engine.ticker import normalize
from osake_mcp.utils.frames import frame_to_rows, years_frame
from osake_mcp.utils.provenance import build_error_response, build_meta, build_provenance

logger = logging.getLogger(__name__)

_source: FundamentalsSource | None = None


def get_source() -> FundamentalsSource:
    """Shared live source, created on first use."""
    global _source
    if _source is None:
        _source = FMPSource()
    return _source


async def load_security(
    symbol: str,
    source: FundamentalsSource | None = None,
) -> tuple[SecurityRecord, dict[str, Any]]:
    """
    Load a security record, live when a credential is configured.

    Without a credential the static set is used. With one, the record is
    served from cache or aggregated live; on any aggregation error the static
    record (or the default one) is substituted and the error is reported in
    the provenance block.

    Args:
        symbol: Raw or canonical ticker
        source: Data source override (default: shared FMP source)

    Returns:
        Tuple of (record, provenance dict)

    Raises:
        DataUnavailable: Empty ticker, or offline and ticker not in the static set
    """
    ticker = normalize(symbol)
    if not ticker:
        raise DataUnavailable("No ticker given", ticker=symbol)

    as_of = datetime.utcnow().isoformat() + "Z"

    if not config.has_api_key():
        record = fallback_record(ticker)
        if record is None:
            raise DataUnavailable(
                f"{ticker} is not in the static data set and no FMP_API_KEY is configured",
                ticker=ticker,
            )
        return record, build_provenance(
            source="static_fallback",
            as_of=as_of,
            fallback_used=True,
            api_error=None,
            warnings=["api_key_missing"],
        )

    cached = record_cache.get_record(ticker)
    if cached is not None:
        logger.debug(f"load_security({ticker}): cache hit")
        return cached, build_provenance(
            source="fmp_cache",
            as_of=as_of,
            fallback_used=False,
            api_error=None,
            resource_uri=record_uri(ticker),
        )

    live_source = source or get_source()
    try:
        record = await aggregate(ticker, live_source, years=config.FUNDAMENTALS_YEARS)
    except OsakeError as e:
        substitute = fallback_record(ticker)
        warnings = ["live_fetch_failed"]
        if substitute is None:
            substitute = default_fallback()
            warnings.append("ticker_not_in_static_set")
        logger.warning(
            f"load_security({ticker}): {type(e).__name__}: {e}. "
            f"Showing static record {substitute.ticker}"
        )
        return substitute, build_provenance(
            source="static_fallback",
            as_of=as_of,
            fallback_used=True,
            api_error=str(e),
            error_type=type(e).__name__,
            warnings=warnings,
        )

    retry_info = live_source.fetch_provenance(ticker) if isinstance(live_source, FMPSource) else {}
    uri = record_cache.store(record)
    return record, build_provenance(
        source="fmp",
        as_of=as_of,
        fallback_used=False,
        api_error=None,
        resource_uri=uri,
        **retry_info,
    )


async def fundamentals_history(symbol: str) -> dict[str, Any]:
    """
    Get the year-by-year fundamentals table for a Helsinki stock.

    Args:
        symbol: Stock ticker (e.g. "nokia", "NOKIA.HE")

    Returns:
        Dict with company info and one row per fiscal year, oldest first
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

    duration_ms = (perf_counter() - start_time) * 1000

    return {
        "meta": build_meta("fundamentals_history", duration_ms),
        "data_provenance": {"fundamentals": provenance},
        "symbol": record.ticker,
        "name": record.name,
        "sector": record.sector,
        "description": record.description,
        "current_price": record.current_price,
        "peg_ratio": record.peg_ratio,
        "latest_year": record.latest_year,
        "years": frame_to_rows(years_frame(record)),
    }
