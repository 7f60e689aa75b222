"""Process-wide configuration, read once from the environment."""

import os

# Financial Modeling Prep credential. Empty means offline mode (static fallback records).
FMP_API_KEY = os.environ.get("FMP_API_KEY", "").strip()
FMP_BASE_URL = os.environ.get("FMP_BASE_URL", "https://financialmodelingprep.com/api/v3").rstrip("/")
FMP_TIMEOUT = float(os.environ.get("FMP_TIMEOUT", "10.0"))  # seconds

# How many fiscal years to request per series
FUNDAMENTALS_YEARS = int(os.environ.get("FUNDAMENTALS_YEARS", "5"))

CACHE_DIR = os.environ.get("CACHE_DIR", ".cache/fundamentals")
CACHE_TTL = int(os.environ.get("CACHE_TTL", "3600"))  # 1 hour


def has_api_key() -> bool:
    """True when a live data source is configured."""
    return len(FMP_API_KEY) > 0
