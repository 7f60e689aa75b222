"""Merge profile, key-metrics and statement series into a SecurityRecord."""

import asyncio
import logging
from collections.abc import Awaitable, Sequence
from typing import Any, Protocol

from osake_mcp.engine.alignment import AlignedRows, AlignmentStrategy, PositionalAlignment
from osake_mcp.engine.errors import DataUnavailable
from osake_mcp.engine.models import UNKNOWN_SECTOR, SecurityRecord, YearRecord
from osake_mcp.engine.ticker import normalize
from osake_mcp.utils.numbers import round_half_up, safe_float
from osake_mcp.utils.sanitize import sanitize_text

logger = logging.getLogger(__name__)

DEFAULT_YEARS = 5
DESCRIPTION_MAX_LENGTH = 100

Row = dict[str, Any]


class FundamentalsSource(Protocol):
    """
    Provider of raw fundamentals.

    Yearly series are returned newest first. "Not found" is an empty list
    (or None for the profile); transport failures raise SourceError.
    """

    async def get_profile(self, ticker: str) -> Row | None: ...

    async def get_key_metrics(self, ticker: str, years: int) -> list[Row]: ...

    async def get_income_statements(self, ticker: str, years: int) -> list[Row]: ...

    async def get_balance_sheets(self, ticker: str, years: int) -> list[Row]: ...


async def aggregate(
    ticker: str,
    source: FundamentalsSource,
    years: int = DEFAULT_YEARS,
    alignment: AlignmentStrategy | None = None,
) -> SecurityRecord:
    """
    Fetch all four inputs concurrently and merge them.

    Args:
        ticker: Canonical ticker (normalized again, which is a no-op for canonical input)
        source: Data source collaborator
        years: Maximum number of fiscal years to request and merge
        alignment: Row pairing strategy (default: positional)

    Returns:
        SecurityRecord with one YearRecord per usable fiscal year

    Raises:
        DataUnavailable: Profile not found or any yearly series empty
        SourceError: Propagated unchanged from the source
    """
    symbol = normalize(ticker)
    if not symbol:
        raise DataUnavailable("No ticker given", ticker=ticker)

    profile, metrics, income, balance = await _fetch_all(
        source.get_profile(symbol),
        source.get_key_metrics(symbol, years),
        source.get_income_statements(symbol, years),
        source.get_balance_sheets(symbol, years),
    )

    return build_security_record(
        symbol,
        profile,
        metrics,
        income,
        balance,
        years=years,
        alignment=alignment,
    )


async def _fetch_all(*coros: Awaitable[Any]) -> list[Any]:
    """
    Run fetches concurrently; the first failure cancels the rest.

    All tasks are finished (done or cancelled) when this returns or raises.
    """
    tasks = [asyncio.ensure_future(coro) for coro in coros]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    for task in tasks:
        if not task.cancelled() and task.exception() is not None:
            raise task.exception()
    return [task.result() for task in tasks]


def build_security_record(
    ticker: str,
    profile: Row | None,
    metrics: Sequence[Row],
    income: Sequence[Row],
    balance: Sequence[Row],
    years: int = DEFAULT_YEARS,
    alignment: AlignmentStrategy | None = None,
) -> SecurityRecord:
    """
    Pure merge step of aggregate(); no I/O.

    Raises:
        DataUnavailable: Profile missing, a series empty, or no usable years
    """
    if not profile:
        raise DataUnavailable(f"Security {ticker} not found", ticker=ticker)
    for name, series in (("key metrics", metrics), ("income statement", income), ("balance sheet", balance)):
        if not series:
            raise DataUnavailable(f"No {name} data for {ticker}", ticker=ticker)

    strategy = alignment or PositionalAlignment()
    try:
        aligned = strategy.align(metrics, income, balance, years)
    except ValueError as e:
        raise DataUnavailable(f"{ticker}: {e}", ticker=ticker) from e

    if not aligned:
        raise DataUnavailable(f"No overlapping fiscal years for {ticker}", ticker=ticker)

    shares = safe_float(profile.get("sharesOutstanding")) or 1.0
    year_records: dict[int, YearRecord] = {}
    for rows in aligned:
        # Aligned rows run oldest to newest; a repeated year keeps the newer row
        if rows.year in year_records:
            logger.warning(
                f"aggregate({ticker}): two rows report fiscal year {rows.year}, "
                f"keeping the newer one"
            )
        year_records[rows.year] = build_year_record(rows, shares)

    logger.debug(
        f"aggregate({ticker}): {len(year_records)} years "
        f"(metrics={len(metrics)}, income={len(income)}, balance={len(balance)})"
    )

    return SecurityRecord(
        name=sanitize_text(profile.get("companyName")) or ticker,
        ticker=ticker,
        sector=sanitize_text(profile.get("sector")) or UNKNOWN_SECTOR,
        description=sanitize_text(profile.get("description"), max_length=DESCRIPTION_MAX_LENGTH) or "",
        current_price=safe_float(profile.get("price")),
        peg_ratio=safe_float(metrics[0].get("pegRatio")),
        years=year_records,
    )


def build_year_record(rows: AlignedRows, shares_outstanding: float = 1.0) -> YearRecord:
    """Derive one YearRecord from a year's aligned rows."""
    m, inc, bal = rows.metrics, rows.income, rows.balance

    revenue = safe_float(inc.get("revenue"))
    eps = safe_float(inc.get("eps"))

    return YearRecord(
        pe=safe_float(m.get("peRatio")),
        peg=safe_float(m.get("pegRatio")),
        pb=safe_float(m.get("pbRatio")),
        pfcf=safe_float(m.get("priceToFreeCashFlowsRatio")),
        eps=eps,
        roe=_as_percent(m.get("roe")),
        ebit=_ebit_margin(m, inc),
        dy=_as_percent(m.get("dividendYield")),
        dps=_dividend_per_share(inc, shares_outstanding),
        eq=_equity_ratio(bal),
        nettovelka=_net_debt_ratio(bal),
        revenue=round_half_up(revenue / 1e6) if revenue is not None else None,
        revenue_growth=_revenue_growth(inc, rows.previous_income),
        earnings_growth=_earnings_growth(eps, rows.previous_income),
    )


def _as_percent(fraction: Any) -> float | None:
    value = safe_float(fraction)
    return value * 100 if value is not None else None


def _ebit_margin(metrics: Row, income: Row) -> float | None:
    # Provided ratio wins; otherwise EBITDA over revenue
    for row in (metrics, income):
        ratio = safe_float(row.get("ebitdaratio"))
        if ratio is not None:
            return ratio * 100

    ebitda = safe_float(income.get("ebitda"))
    revenue = safe_float(income.get("revenue"))
    if ebitda is None or not revenue:
        return None
    return ebitda / revenue * 100


def _equity_ratio(balance: Row) -> float | None:
    equity = safe_float(balance.get("totalStockholdersEquity"))
    if equity is None:
        return None
    total_assets = safe_float(balance.get("totalAssets")) or 1.0
    return equity / total_assets * 100


def _net_debt_ratio(balance: Row) -> float | None:
    equity = safe_float(balance.get("totalStockholdersEquity"))
    if not equity:
        return None
    total_debt = (safe_float(balance.get("longTermDebt")) or 0.0) + (
        safe_float(balance.get("shortTermDebt")) or 0.0
    )
    cash = safe_float(balance.get("cashAndCashEquivalents")) or 0.0
    return (total_debt - cash) / equity * 100


def _dividend_per_share(income: Row, shares_outstanding: float) -> float | None:
    dividends = safe_float(income.get("dividendsPaid"))
    if dividends is None:
        return None
    return abs(dividends) / (shares_outstanding or 1.0)


def _revenue_growth(income: Row, previous: Row | None) -> float | None:
    # Earliest year in the window is the no-growth baseline
    if previous is None:
        return 0.0
    current_revenue = safe_float(income.get("revenue"))
    previous_revenue = safe_float(previous.get("revenue"))
    if current_revenue is None or not previous_revenue:
        return None
    return (current_revenue - previous_revenue) / abs(previous_revenue) * 100


def _earnings_growth(eps: float | None, previous: Row | None) -> float | None:
    previous_eps = safe_float(previous.get("eps")) if previous else None
    if not previous_eps:
        return 0.0
    if eps is None:
        return None
    return (eps - previous_eps) / abs(previous_eps) * 100
