"""Disk cache for aggregated security records."""

import gzip
import hashlib
import json
from datetime import datetime
from typing import Any

import diskcache

from osake_mcp import config
from osake_mcp.engine.models import SecurityRecord
from osake_mcp.engine.ticker import normalize
from osake_mcp.utils.frames import frame_to_csv, years_frame


def record_uri(ticker: str) -> str:
    """Canonical resource URI for a ticker's history table."""
    return f"fundamentals://{normalize(ticker)}"


class RecordCache:
    """
    Cache of live aggregation results, keyed by resource URI.

    Each entry holds the record as JSON plus its yearly table as gzipped CSV,
    so the resource handler can serve CSV without recomputing anything.
    """

    def __init__(self, cache_dir: str | None = None, default_ttl: int | None = None):
        self.cache: diskcache.Cache = diskcache.Cache(cache_dir or config.CACHE_DIR)
        self._default_ttl = default_ttl if default_ttl is not None else config.CACHE_TTL

    def store(self, record: SecurityRecord, ttl: int | None = None) -> str:
        """
        Store a record and its CSV table, return canonical URI.

        Args:
            record: Aggregated record
            ttl: Cache TTL in seconds (default: CACHE_TTL)

        Returns:
            Canonical URI for the cached data
        """
        uri = record_uri(record.ticker)

        csv_bytes = frame_to_csv(years_frame(record)).encode("utf-8")
        csv_gz = gzip.compress(csv_bytes)

        entry: dict[str, Any] = {
            "record": json.dumps(record.to_dict(), ensure_ascii=False),
            "csv_gz": csv_gz,
            "rows": len(record.years),
            "size_bytes": len(csv_bytes),
            "hash": hashlib.sha256(csv_bytes).hexdigest()[:16],
            "stored_at": datetime.utcnow().isoformat(),
        }

        expire = ttl if ttl is not None else self._default_ttl
        self.cache.set(uri, entry, expire=expire)

        return uri

    def get(self, uri: str) -> dict[str, Any] | None:
        """Get raw cache entry by URI."""
        return self.cache.get(uri)

    def get_record(self, ticker: str) -> SecurityRecord | None:
        """Cached record for a ticker, or None if not found/expired."""
        entry = self.get(record_uri(ticker))
        if not entry:
            return None
        return SecurityRecord.from_dict(json.loads(entry["record"]))

    def get_csv(self, uri: str) -> str | None:
        """Decompressed CSV text by URI, or None if not found."""
        entry = self.get(uri)
        if not entry:
            return None
        return gzip.decompress(entry["csv_gz"]).decode("utf-8")

    def get_metadata(self, uri: str) -> dict[str, Any] | None:
        """Cache metadata without decompressing data."""
        entry = self.get(uri)
        if not entry:
            return None
        return {
            "rows": entry["rows"],
            "size_bytes": entry["size_bytes"],
            "hash": entry["hash"],
            "stored_at": entry["stored_at"],
        }

    def exists(self, uri: str) -> bool:
        """Check if URI exists in cache."""
        return uri in self.cache

    def clear(self) -> None:
        """Clear all cached data."""
        self.cache.clear()


# Global instance
record_cache = RecordCache()
