"""Data layer for fetching and caching fundamentals."""

from osake_mcp.data.cache import RecordCache, record_cache, record_uri
from osake_mcp.data.fmp_client import FMPSource, RetryResult, shutdown_executor

__all__ = [
    # Cache
    "RecordCache",
    "record_cache",
    "record_uri",
    # Financial Modeling Prep
    "FMPSource",
    "RetryResult",
    "shutdown_executor",
]
