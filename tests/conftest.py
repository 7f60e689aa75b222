"""Pytest configuration and fixtures."""

import copy
from typing import Any

import pytest

from osake_mcp import config
from osake_mcp.data.cache import RecordCache
from osake_mcp.engine.fallback import fallback_record
from osake_mcp.engine.models import SecurityRecord


# Financial Modeling Prep shaped rows, newest first
PROFILE: dict[str, Any] = {
    "symbol": "TESTI.HE",
    "companyName": "Testi Oyj",
    "sector": "Technology",
    "description": "Testi Oyj valmistaa verkkolaitteita. " * 6,
    "price": 4.2,
    "sharesOutstanding": 5_000_000_000,
}

METRICS: list[dict[str, Any]] = [
    {
        "date": "2024-12-31",
        "peRatio": 12.0,
        "pegRatio": 1.5,
        "pbRatio": 1.4,
        "priceToFreeCashFlowsRatio": 15.0,
        "roe": 0.12,
        "dividendYield": 0.03,
    },
    {
        "date": "2023-12-31",
        "peRatio": 14.0,
        "pegRatio": None,
        "pbRatio": 1.6,
        "priceToFreeCashFlowsRatio": 18.0,
        "roe": 0.10,
        "dividendYield": 0.025,
    },
    {
        "date": "2022-12-31",
        "peRatio": 16.0,
        "pegRatio": 2.0,
        "pbRatio": 1.8,
        "priceToFreeCashFlowsRatio": 20.0,
        "roe": 0.08,
        "dividendYield": 0.02,
    },
]

INCOME: list[dict[str, Any]] = [
    {
        "date": "2024-12-31",
        "calendarYear": "2024",
        "revenue": 22_000_000_000,
        "eps": 0.33,
        "ebitda": 2_640_000_000,
        "ebitdaratio": 0.12,
        "dividendsPaid": -550_000_000,
    },
    {
        "date": "2023-12-31",
        "calendarYear": "2023",
        "revenue": 20_000_000_000,
        "eps": 0.30,
        "ebitda": 2_000_000_000,
        "dividendsPaid": -500_000_000,
    },
    {
        "date": "2022-12-31",
        "calendarYear": "2022",
        "revenue": 25_000_000_000,
        "eps": 0.25,
        "ebitda": 2_500_000_000,
        "ebitdaratio": 0.10,
    },
]

BALANCE: list[dict[str, Any]] = [
    {
        "date": "2024-12-31",
        "totalAssets": 40_000_000_000,
        "totalStockholdersEquity": 20_000_000_000,
        "longTermDebt": 4_000_000_000,
        "shortTermDebt": 1_000_000_000,
        "cashAndCashEquivalents": 3_000_000_000,
    },
    {
        "date": "2023-12-31",
        "totalAssets": 38_000_000_000,
        "totalStockholdersEquity": 18_000_000_000,
        "longTermDebt": 5_000_000_000,
        "shortTermDebt": 1_000_000_000,
        "cashAndCashEquivalents": 2_000_000_000,
    },
    {
        "date": "2022-12-31",
        "totalAssets": 36_000_000_000,
        "totalStockholdersEquity": 16_000_000_000,
        "longTermDebt": 6_000_000_000,
        "shortTermDebt": 0,
        "cashAndCashEquivalents": 2_000_000_000,
    },
]


class FakeSource:
    """In-memory FundamentalsSource; honours the year limit like the real API."""

    def __init__(
        self,
        profile: dict[str, Any] | None = None,
        metrics: list[dict[str, Any]] | None = None,
        income: list[dict[str, Any]] | None = None,
        balance: list[dict[str, Any]] | None = None,
        error: Exception | None = None,
    ):
        self.profile = profile
        self.metrics = metrics or []
        self.income = income or []
        self.balance = balance or []
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def get_profile(self, ticker: str) -> dict[str, Any] | None:
        self.calls.append(("profile", ticker))
        if self.error:
            raise self.error
        return self.profile

    async def get_key_metrics(self, ticker: str, years: int) -> list[dict[str, Any]]:
        self.calls.append(("key-metrics", ticker))
        return self.metrics[:years]

    async def get_income_statements(self, ticker: str, years: int) -> list[dict[str, Any]]:
        self.calls.append(("income-statement", ticker))
        return self.income[:years]

    async def get_balance_sheets(self, ticker: str, years: int) -> list[dict[str, Any]]:
        self.calls.append(("balance-sheet-statement", ticker))
        return self.balance[:years]


@pytest.fixture
def fmp_rows() -> dict[str, Any]:
    """Deep copies of the sample rows, safe to mutate per test."""
    return {
        "profile": copy.deepcopy(PROFILE),
        "metrics": copy.deepcopy(METRICS),
        "income": copy.deepcopy(INCOME),
        "balance": copy.deepcopy(BALANCE),
    }


@pytest.fixture
def fake_source(fmp_rows: dict[str, Any]) -> FakeSource:
    """Source serving the three-year sample company."""
    return FakeSource(**fmp_rows)


@pytest.fixture
def nokia_record() -> SecurityRecord:
    """Static Nokia record (2021-2025)."""
    record = fallback_record("NOKIA.HE")
    assert record is not None
    return record


@pytest.fixture
def tmp_cache(tmp_path) -> RecordCache:
    """Record cache in a temporary directory."""
    cache = RecordCache(cache_dir=str(tmp_path / "cache"), default_ttl=60)
    yield cache
    cache.cache.close()


@pytest.fixture
def offline(monkeypatch: pytest.MonkeyPatch) -> None:
    """No credential configured."""
    monkeypatch.setattr(config, "FMP_API_KEY", "")


@pytest.fixture
def live(monkeypatch: pytest.MonkeyPatch) -> None:
    """Credential configured (requests go to whatever source the test injects)."""
    monkeypatch.setattr(config, "FMP_API_KEY", "test-key")
