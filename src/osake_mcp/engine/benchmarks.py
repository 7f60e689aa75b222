"""Static sector and market benchmark tables, and the sector comparison."""

from types import MappingProxyType

from osake_mcp.engine.models import Benchmark, MetricComparison, SecurityRecord

SECTOR_BENCHMARKS = MappingProxyType(
    {
        "Teknologia": Benchmark(pe=18.4, peg=1.8, pb=2.8, roe=12.4, ebit=9.8, dy=1.2, eq=44.2),
        "Rahoitus": Benchmark(pe=11.8, peg=1.4, pb=1.4, roe=11.8, ebit=16.4, dy=5.2, eq=22.4),
        "Teollisuus": Benchmark(pe=22.4, peg=2.8, pb=4.2, roe=18.4, ebit=10.2, dy=3.2, eq=38.4),
        "Energia": Benchmark(pe=14.8, peg=1.6, pb=2.1, roe=14.2, ebit=11.8, dy=3.4, eq=38.8),
    }
)

# Helsinki exchange average
MARKET_BENCHMARK = Benchmark(pe=16.2, peg=1.9, pb=2.4, roe=14.8, ebit=11.4, dy=3.8, eq=42.2)

DEFAULT_SECTOR = "Teknologia"

# Provider sector names -> benchmark table keys
SECTOR_ALIASES = MappingProxyType(
    {
        "technology": "Teknologia",
        "communication services": "Teknologia",
        "financial services": "Rahoitus",
        "financials": "Rahoitus",
        "industrials": "Teollisuus",
        "basic materials": "Teollisuus",
        "energy": "Energia",
        "utilities": "Energia",
    }
)

# (metric, label, lower_is_better)
COMPARED_METRICS: tuple[tuple[str, str, bool], ...] = (
    ("pe", "P/E-luku", True),
    ("peg", "PEG-luku", True),
    ("pb", "P/B-luku", True),
    ("roe", "ROE-%", False),
    ("ebit", "EBIT-%", False),
    ("dy", "Osinkotuotto-%", False),
    ("eq", "Omavaraisuus-%", False),
)


def resolve_sector(sector: str | None) -> str:
    """Map a sector name onto a benchmark table key (default: Teknologia)."""
    if not sector:
        return DEFAULT_SECTOR
    if sector in SECTOR_BENCHMARKS:
        return sector
    return SECTOR_ALIASES.get(sector.strip().lower(), DEFAULT_SECTOR)


def sector_benchmark(sector: str | None) -> Benchmark:
    """Benchmark table for a sector."""
    return SECTOR_BENCHMARKS[resolve_sector(sector)]


def compare_to_sector(
    record: SecurityRecord,
    benchmark: Benchmark | None = None,
) -> list[MetricComparison]:
    """
    Compare the latest year against sector averages.

    PEG uses the record-level ratio, everything else the latest YearRecord.
    ``better`` is None whenever either side is missing.
    """
    bench = benchmark or sector_benchmark(record.sector)
    latest = record.latest

    comparisons: list[MetricComparison] = []
    for metric, label, lower_is_better in COMPARED_METRICS:
        if metric == "peg":
            value = record.peg_ratio
        else:
            value = getattr(latest, metric) if latest is not None else None
        reference = getattr(bench, metric)

        better: bool | None = None
        if value is not None and reference is not None:
            better = value < reference if lower_is_better else value > reference

        comparisons.append(
            MetricComparison(
                metric=metric,
                label=label,
                value=value,
                benchmark=reference,
                lower_is_better=lower_is_better,
                better=better,
            )
        )
    return comparisons
