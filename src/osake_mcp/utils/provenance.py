"""Data provenance and metadata utilities."""

from datetime import datetime
from typing import Any

from osake_mcp import SCHEMA_VERSION, SERVER_VERSION


def build_meta(tool: str, duration_ms: float | None = None) -> dict[str, Any]:
    """
    Build standard metadata block for responses.

    Args:
        tool: Name of the tool producing this response
        duration_ms: Execution time in milliseconds (optional)

    Returns:
        Metadata dict with version info
    """
    meta: dict[str, Any] = {
        "server_version": SERVER_VERSION,
        "schema_version": SCHEMA_VERSION,
        "tool": tool,
    }
    if duration_ms is not None:
        meta["duration_ms"] = round(duration_ms, 1)
    return meta


def build_provenance(
    source: str,
    as_of: datetime | str | None = None,
    fallback_used: bool = False,
    api_error: str | None = None,
    error_type: str | None = None,
    resource_uri: str | None = None,
    warnings: list[str] | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Build data provenance block for a single data source.

    Args:
        source: Data source name ("fmp", "fmp_cache" or "static_fallback")
        as_of: Timestamp of data freshness
        fallback_used: True when a static record stands in for live data
        api_error: Message of the live failure that caused the fallback
        error_type: Exception class name of that failure
        resource_uri: URI of the cached CSV table, when one was stored
        warnings: Machine-readable warning codes
        **kwargs: Additional provenance fields (e.g. retry counts)

    Returns:
        Provenance dict for this data source. ``fallback_used``, ``api_error``
        and ``warnings`` are always present; ``error_type`` and
        ``resource_uri`` only when set.
    """
    prov: dict[str, Any] = {"source": source}

    if as_of is not None:
        if isinstance(as_of, datetime):
            prov["as_of"] = as_of.isoformat()
        else:
            prov["as_of"] = as_of

    prov["fallback_used"] = fallback_used
    prov["api_error"] = api_error
    if error_type is not None:
        prov["error_type"] = error_type
    if resource_uri is not None:
        prov["resource_uri"] = resource_uri

    prov.update(kwargs)
    prov["warnings"] = list(warnings) if warnings else []

    return prov


def build_error_response(
    error_type: str,
    message: str,
    symbol: str | None = None,
) -> dict[str, Any]:
    """
    Build standardized error response.

    Args:
        error_type: Type of error (invalid_symbol, data_unavailable, insufficient_data)
        message: Human-readable error message
        symbol: Symbol that caused the error (if applicable)

    Returns:
        Error response dict
    """
    response: dict[str, Any] = {
        "error": True,
        "error_type": error_type,
        "message": message,
        "meta": build_meta("error"),
    }

    if symbol is not None:
        response["symbol"] = symbol

    return response
