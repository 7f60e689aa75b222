"""Utility modules."""

from osake_mcp.utils.numbers import is_missing, round_half_up, safe_float
from osake_mcp.utils.provenance import build_error_response, build_meta, build_provenance
from osake_mcp.utils.sanitize import sanitize_text

__all__ = [
    "is_missing",
    "round_half_up",
    "safe_float",
    "build_error_response",
    "build_meta",
    "build_provenance",
    "sanitize_text",
]
