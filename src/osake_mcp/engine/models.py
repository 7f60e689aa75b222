"""Record types shared by the aggregator, scoring engine and tools."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields
from types import MappingProxyType
from typing import Any

from osake_mcp.utils.numbers import safe_float

# Sector sentinel used when the provider omits the sector
UNKNOWN_SECTOR = "Tuntematon"


@dataclass(frozen=True)
class YearRecord:
    """
    One calendar year of normalized fundamentals.

    Percentages are stored as percentages (10.4 means 10.4 %), revenue in
    millions. ``None`` means the value could not be computed; 0 is a real value.
    """

    pe: float | None = None
    peg: float | None = None
    pb: float | None = None
    pfcf: float | None = None
    eps: float | None = None
    roe: float | None = None
    ebit: float | None = None
    dy: float | None = None
    dps: float | None = None
    eq: float | None = None
    nettovelka: float | None = None
    revenue: float | None = None
    revenue_growth: float | None = None
    earnings_growth: float | None = None

    def to_dict(self) -> dict[str, float | None]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "YearRecord":
        """Build from a dict, ignoring unknown keys and coercing numbers."""
        return cls(**{f.name: safe_float(data.get(f.name)) for f in fields(cls)})


@dataclass(frozen=True)
class SecurityRecord:
    """Aggregated fundamentals for one security, years ordered oldest first."""

    name: str
    ticker: str
    sector: str
    description: str
    current_price: float | None
    peg_ratio: float | None
    years: Mapping[int, YearRecord]

    def __post_init__(self) -> None:
        # Freeze years in ascending order
        ordered = {int(y): self.years[y] for y in sorted(self.years, key=int)}
        object.__setattr__(self, "years", MappingProxyType(ordered))

    @property
    def latest_year(self) -> int | None:
        if not self.years:
            return None
        return max(self.years)

    @property
    def latest(self) -> YearRecord | None:
        year = self.latest_year
        return self.years[year] if year is not None else None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict. Year keys become strings."""
        return {
            "name": self.name,
            "ticker": self.ticker,
            "sector": self.sector,
            "description": self.description,
            "current_price": self.current_price,
            "peg_ratio": self.peg_ratio,
            "years": {str(y): rec.to_dict() for y, rec in self.years.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SecurityRecord":
        years = data.get("years") or {}
        return cls(
            name=data.get("name") or "",
            ticker=data.get("ticker") or "",
            sector=data.get("sector") or UNKNOWN_SECTOR,
            description=data.get("description") or "",
            current_price=safe_float(data.get("current_price")),
            peg_ratio=safe_float(data.get("peg_ratio")),
            years={int(y): YearRecord.from_dict(rec) for y, rec in years.items()},
        )


@dataclass(frozen=True)
class Benchmark:
    """Sector or market averages used as comparison inputs."""

    pe: float | None = None
    peg: float | None = None
    pb: float | None = None
    pfcf: float | None = None
    eps: float | None = None
    roe: float | None = None
    ebit: float | None = None
    dy: float | None = None
    dps: float | None = None
    eq: float | None = None
    nettovelka: float | None = None
    revenue: float | None = None

    def to_dict(self) -> dict[str, float]:
        """Only the populated metrics."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class ScoreSet:
    """Category scores and the weighted total, each an int in [0, 100]."""

    valuation: int
    quality: int
    growth: int
    solvency: int
    total: int

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class MetricComparison:
    """One stock-versus-benchmark line."""

    metric: str
    label: str
    value: float | None
    benchmark: float | None
    lower_is_better: bool
    better: bool | None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
