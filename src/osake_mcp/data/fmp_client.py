"""Async Financial Modeling Prep client with bounded concurrency and retry logic."""

import asyncio
import logging
import os
import random
import re
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, TypeVar

import requests
from requests.exceptions import ConnectionError as RequestsConnectionError
from requests.exceptions import HTTPError, Timeout

from osake_mcp import config
from osake_mcp.engine.errors import SourceError

logger = logging.getLogger(__name__)

# Bounded concurrency for HTTP calls
_max_workers = int(os.environ.get("FMP_MAX_WORKERS", "4"))
_executor = ThreadPoolExecutor(max_workers=_max_workers)

# Retry configuration
_max_retries = int(os.environ.get("FMP_MAX_RETRIES", "3"))
_base_delay = float(os.environ.get("FMP_BASE_DELAY", "1.0"))  # seconds
_max_delay = float(os.environ.get("FMP_MAX_DELAY", "30.0"))  # seconds

_APIKEY_PATTERN = re.compile(r"apikey=[^&\s]+", re.IGNORECASE)

T = TypeVar("T")


def _is_retryable_error(error: Exception) -> bool:
    """Transient failures worth another attempt: 429, 5xx, connection drops, timeouts."""
    if isinstance(error, (RequestsConnectionError, Timeout)):
        return True

    if (
        isinstance(error, HTTPError)
        and hasattr(error, "response")
        and error.response is not None
    ):
        status_code = error.response.status_code
        return status_code == 429 or 500 <= status_code < 600

    error_str = str(error).lower()
    return any(p in error_str for p in ("rate limit", "too many requests", "temporary"))


def _calculate_backoff(attempt: int) -> float:
    """Calculate delay with exponential backoff and jitter."""
    delay = _base_delay * (2**attempt)
    # Add jitter (+/-25%)
    jitter = delay * 0.25 * (2 * random.random() - 1)
    return min(delay + jitter, _max_delay)


def _redact(error: Exception | str) -> str:
    """Error text with the API key masked (requests puts the full URL in HTTPError)."""
    return _APIKEY_PATTERN.sub("apikey=***", str(error))


def _status_code(error: Exception) -> int | None:
    response = getattr(error, "response", None)
    return getattr(response, "status_code", None)


@dataclass
class RetryResult:
    """Result of a retry operation with provenance tracking."""

    result: Any
    attempts: int
    total_backoff_seconds: float

    def to_provenance(self) -> dict[str, Any]:
        """Retry counts for the data_provenance field."""
        return {
            "attempts": self.attempts,
            "total_backoff_seconds": self.total_backoff_seconds,
        }


async def _retry_with_backoff(
    operation_name: str,
    sync_func: Callable[[], T],
    max_retries: int = _max_retries,
) -> RetryResult:
    """
    Execute a blocking call on the executor with retry logic.

    Args:
        operation_name: Name for logging (e.g., "key-metrics(NOKIA.HE)")
        sync_func: Synchronous function to execute
        max_retries: Maximum number of retry attempts

    Returns:
        RetryResult with result and attempt count

    Raises:
        SourceError: Non-retryable failure, or retries exhausted
    """
    total_backoff = 0.0

    for attempt in range(max_retries + 1):
        try:
            loop = asyncio.get_running_loop()
            result = await loop.run_in_executor(_executor, sync_func)
            return RetryResult(
                result=result,
                attempts=attempt + 1,
                total_backoff_seconds=round(total_backoff, 2),
            )
        except SourceError:
            raise
        except Exception as e:
            if not _is_retryable_error(e):
                raise SourceError(
                    f"{operation_name} failed: {_redact(e)}",
                    status_code=_status_code(e),
                    last_error=e,
                ) from e

            if attempt >= max_retries:
                logger.warning(
                    f"{operation_name}: Failed after {attempt + 1} attempts. Last error: {_redact(e)}"
                )
                raise SourceError(
                    f"{operation_name} failed after {attempt + 1} attempts: {_redact(e)}",
                    status_code=_status_code(e),
                    last_error=e,
                ) from e

            delay = _calculate_backoff(attempt)
            total_backoff += delay
            logger.info(
                f"{operation_name}: Attempt {attempt + 1} failed ({_redact(e)}). "
                f"Retrying in {delay:.1f}s..."
            )
            await asyncio.sleep(delay)

    # Unreachable: the loop either returns or raises
    raise SourceError(f"{operation_name} failed after {max_retries + 1} attempts")


class FMPSource:
    """
    FundamentalsSource backed by the Financial Modeling Prep v3 REST API.

    Yearly endpoints return rows newest first. An unknown ticker yields an
    empty list; HTTP and protocol failures raise SourceError.
    """

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
        max_retries: int = _max_retries,
    ):
        self.api_key = api_key if api_key is not None else config.FMP_API_KEY
        self.base_url = (base_url or config.FMP_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else config.FMP_TIMEOUT
        self.session = session or requests.Session()
        self.max_retries = max_retries
        self._semaphore = asyncio.Semaphore(_max_workers)
        # ticker -> endpoint -> retry counts of the latest successful request
        self._retry_stats: dict[str, dict[str, dict[str, Any]]] = {}

    def fetch_provenance(self, ticker: str) -> dict[str, Any]:
        """
        Retry counts summed over the latest request to each endpoint for a ticker.

        Returns:
            Dict with requests, attempts and total_backoff_seconds (empty if
            nothing was fetched for the ticker)
        """
        stats = self._retry_stats.get(ticker)
        if not stats:
            return {}
        return {
            "requests": len(stats),
            "attempts": sum(s["attempts"] for s in stats.values()),
            "total_backoff_seconds": round(sum(s["total_backoff_seconds"] for s in stats.values()), 2),
        }

    async def get_profile(self, ticker: str) -> dict[str, Any] | None:
        rows = await self._get_rows("profile", ticker)
        return rows[0] if rows else None

    async def get_key_metrics(self, ticker: str, years: int) -> list[dict[str, Any]]:
        return await self._get_rows("key-metrics", ticker, limit=years)

    async def get_income_statements(self, ticker: str, years: int) -> list[dict[str, Any]]:
        return await self._get_rows("income-statement", ticker, limit=years)

    async def get_balance_sheets(self, ticker: str, years: int) -> list[dict[str, Any]]:
        return await self._get_rows("balance-sheet-statement", ticker, limit=years)

    async def _get_rows(
        self,
        endpoint: str,
        ticker: str,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        url = f"{self.base_url}/{endpoint}/{ticker}"
        params: dict[str, Any] = {"apikey": self.api_key}
        if limit is not None:
            params["limit"] = limit

        def _fetch() -> list[dict[str, Any]]:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
            return _parse_rows(endpoint, ticker, response.json())

        async with self._semaphore:
            retry_result = await _retry_with_backoff(
                f"{endpoint}({ticker})",
                _fetch,
                max_retries=self.max_retries,
            )
        self._retry_stats.setdefault(ticker, {})[endpoint] = retry_result.to_provenance()
        return retry_result.result


def _parse_rows(endpoint: str, ticker: str, payload: Any) -> list[dict[str, Any]]:
    """Validate the JSON shape: a list of objects, or an FMP error object."""
    if isinstance(payload, dict):
        message = payload.get("Error Message") or payload.get("error") or "unexpected object"
        raise SourceError(f"{endpoint}({ticker}) failed: {message}")
    if not isinstance(payload, list):
        raise SourceError(f"{endpoint}({ticker}) returned {type(payload).__name__}, expected list")
    return [row for row in payload if isinstance(row, dict)]


async def shutdown_executor() -> None:
    """Cleanup on server shutdown."""
    _executor.shutdown(wait=False, cancel_futures=True)
