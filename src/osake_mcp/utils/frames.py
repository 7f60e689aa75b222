"""Tabular views of yearly fundamentals."""

import pandas as pd

from osake_mcp.engine.models import SecurityRecord, YearRecord

# Column order for the history table
YEAR_COLUMNS = ["year"] + list(YearRecord.__dataclass_fields__)


def years_frame(record: SecurityRecord) -> pd.DataFrame:
    """
    One row per fiscal year, oldest first, in a fixed column order.

    Missing values stay missing (NaN), they are never filled with 0.
    """
    rows = [{"year": year, **rec.to_dict()} for year, rec in record.years.items()]
    df = pd.DataFrame(rows, columns=YEAR_COLUMNS)
    if not df.empty:
        df["year"] = df["year"].astype(int)
    return df


def frame_to_rows(df: pd.DataFrame) -> list[dict]:
    """Convert to list of dicts with NaN mapped back to None."""
    return df.astype(object).where(df.notna(), None).to_dict("records")


def frame_to_csv(df: pd.DataFrame) -> str:
    """Convert to CSV string for cache/resource."""
    return df.to_csv(index=False)
