"""Strategies for pairing rows of the metrics, income and balance series."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Protocol

Row = dict[str, Any]


@dataclass(frozen=True)
class AlignedRows:
    """Rows describing one fiscal year, plus the prior year's income row."""

    year: int
    metrics: Row
    income: Row
    balance: Row
    previous_income: Row | None


class AlignmentStrategy(Protocol):
    """Turns three newest-first series into aligned years, oldest first."""

    def align(
        self,
        metrics: Sequence[Row],
        income: Sequence[Row],
        balance: Sequence[Row],
        limit: int,
    ) -> list[AlignedRows]: ...


def reporting_year(*rows: Row | None) -> int | None:
    """
    Calendar year of the first row that carries a reporting date.

    Looks at ``date`` first, then ``calendarYear``.
    """
    for row in rows:
        if not row:
            continue
        raw_date = row.get("date")
        if isinstance(raw_date, (date, datetime)):
            return raw_date.year
        if isinstance(raw_date, str) and len(raw_date) >= 4:
            try:
                return datetime.fromisoformat(raw_date[:10]).year
            except ValueError:
                pass
        calendar_year = row.get("calendarYear")
        if calendar_year is not None:
            try:
                return int(calendar_year)
            except (ValueError, TypeError):
                pass
    return None


class PositionalAlignment:
    """
    Pair rows by index: metrics[i], income[i] and balance[i] are one year.

    Only the shared prefix of the three series is used, so no year is
    produced unless all three series have a row for it. If a provider skips
    a fiscal year in one series, rows from different years get paired.
    """

    def align(
        self,
        metrics: Sequence[Row],
        income: Sequence[Row],
        balance: Sequence[Row],
        limit: int,
    ) -> list[AlignedRows]:
        n = min(len(metrics), len(income), len(balance), limit)
        aligned: list[AlignedRows] = []
        for i in range(n - 1, -1, -1):
            year = reporting_year(metrics[i], income[i])
            if year is None:
                raise ValueError(f"Row {i} has no reporting date")
            previous = income[i + 1] if i + 1 < len(income) else None
            aligned.append(
                AlignedRows(
                    year=year,
                    metrics=metrics[i],
                    income=income[i],
                    balance=balance[i],
                    previous_income=previous,
                )
            )
        return aligned


class ReportingYearAlignment:
    """Join the three series on the calendar year of each row's reporting date."""

    def align(
        self,
        metrics: Sequence[Row],
        income: Sequence[Row],
        balance: Sequence[Row],
        limit: int,
    ) -> list[AlignedRows]:
        by_year_metrics = _index_by_year(metrics)
        by_year_income = _index_by_year(income)
        by_year_balance = _index_by_year(balance)

        shared = set(by_year_metrics) & set(by_year_income) & set(by_year_balance)
        years = sorted(shared)[-limit:] if limit > 0 else []

        return [
            AlignedRows(
                year=year,
                metrics=by_year_metrics[year],
                income=by_year_income[year],
                balance=by_year_balance[year],
                previous_income=by_year_income.get(year - 1),
            )
            for year in years
        ]


def _index_by_year(rows: Sequence[Row]) -> dict[int, Row]:
    # Series are newest first; keep the newest row when a year repeats
    indexed: dict[int, Row] = {}
    for row in rows:
        year = reporting_year(row)
        if year is not None and year not in indexed:
            indexed[year] = row
    return indexed
