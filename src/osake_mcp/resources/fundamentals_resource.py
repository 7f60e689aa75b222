"""Fundamentals history resource handler."""

from osake_mcp.data.cache import record_cache
from osake_mcp.engine.fallback import fallback_record
from osake_mcp.utils.frames import frame_to_csv, years_frame

URI_PREFIX = "fundamentals://"


class ResourceNotFoundError(Exception):
    """Resource not found in cache or static set."""

    pass


def read_fundamentals_resource(uri: str) -> tuple[str, str]:
    """
    Serve a yearly table as CSV.

    Live results come from the cache only (never fetched here); tickers in
    the static set are rendered from their fallback record.

    Args:
        uri: Resource URI (e.g., fundamentals://NOKIA.HE)

    Returns:
        Tuple of (csv_text, mime_type)

    Raises:
        ResourceNotFoundError: If resource is neither cached nor static
    """
    csv_text = record_cache.get_csv(uri)
    if csv_text is not None:
        return csv_text, "text/csv"

    record = fallback_record(uri.removeprefix(URI_PREFIX))
    if record is None:
        raise ResourceNotFoundError(f"Resource not cached. Call get_fundamentals first: {uri}")

    return frame_to_csv(years_frame(record)), "text/csv"
