"""Tests for the Financial Modeling Prep client (no network)."""

import asyncio
from unittest.mock import MagicMock, patch

import pytest
import requests

from osake_mcp.data import fmp_client
from osake_mcp.data.fmp_client import FMPSource, _calculate_backoff, _is_retryable_error, _redact
from osake_mcp.engine.errors import SourceError


def _response(payload=None, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(
            f"{status_code} Error for url: https://example.test/profile/NOKIA.HE?apikey=secret-key",
            response=response,
        )
    return response


def _source(*responses, max_retries: int = 2) -> tuple[FMPSource, MagicMock]:
    session = MagicMock()
    session.get.side_effect = list(responses)
    source = FMPSource(
        api_key="secret-key",
        base_url="https://example.test/api/v3/",
        timeout=5.0,
        session=session,
        max_retries=max_retries,
    )
    return source, session


@pytest.fixture(autouse=True)
def no_backoff():
    """Retries happen immediately."""
    with patch.object(fmp_client, "_calculate_backoff", return_value=0.0):
        yield


class TestFMPSource:
    """Endpoint wiring and payload handling."""

    def test_key_metrics_request(self) -> None:
        """Yearly endpoints pass the ticker in the path and limit as a parameter."""
        rows = [{"date": "2024-12-31", "peRatio": 12.0}]
        source, session = _source(_response(rows))

        result = asyncio.run(source.get_key_metrics("NOKIA.HE", 5))

        assert result == rows
        session.get.assert_called_once_with(
            "https://example.test/api/v3/key-metrics/NOKIA.HE",
            params={"apikey": "secret-key", "limit": 5},
            timeout=5.0,
        )

    @pytest.mark.parametrize(
        ("method", "endpoint"),
        [
            ("get_income_statements", "income-statement"),
            ("get_balance_sheets", "balance-sheet-statement"),
        ],
    )
    def test_statement_endpoints(self, method: str, endpoint: str) -> None:
        source, session = _source(_response([]))
        asyncio.run(getattr(source, method)("SAMPO.HE", 3))
        url = session.get.call_args.args[0]
        assert url.endswith(f"/{endpoint}/SAMPO.HE")
        assert session.get.call_args.kwargs["params"]["limit"] == 3

    def test_profile_first_row(self) -> None:
        """Profile returns the first object, without a limit parameter."""
        source, session = _source(_response([{"companyName": "Nokia Oyj"}, {"companyName": "x"}]))
        profile = asyncio.run(source.get_profile("NOKIA.HE"))
        assert profile == {"companyName": "Nokia Oyj"}
        assert "limit" not in session.get.call_args.kwargs["params"]

    def test_profile_not_found(self) -> None:
        """Unknown ticker gives an empty list, which means no profile."""
        source, _ = _source(_response([]))
        assert asyncio.run(source.get_profile("EIOLE.HE")) is None

    def test_non_object_rows_dropped(self) -> None:
        source, _ = _source(_response([{"date": "2024-12-31"}, "junk", None]))
        assert asyncio.run(source.get_key_metrics("NOKIA.HE", 5)) == [{"date": "2024-12-31"}]

    def test_error_object_payload(self) -> None:
        """FMP reports bad keys as a JSON object with status 200."""
        source, session = _source(_response({"Error Message": "Invalid API KEY."}))
        with pytest.raises(SourceError, match="Invalid API KEY"):
            asyncio.run(source.get_key_metrics("NOKIA.HE", 5))
        assert session.get.call_count == 1

    def test_unexpected_payload_type(self) -> None:
        source, _ = _source(_response("not json rows"))
        with pytest.raises(SourceError, match="expected list"):
            asyncio.run(source.get_key_metrics("NOKIA.HE", 5))


class TestRetries:
    """Retry with backoff around each request."""

    def test_client_error_not_retried(self) -> None:
        """401 fails at once and carries the status code, without leaking the key."""
        source, session = _source(_response(status_code=401), _response([]))

        with pytest.raises(SourceError) as exc_info:
            asyncio.run(source.get_key_metrics("NOKIA.HE", 5))

        assert session.get.call_count == 1
        assert exc_info.value.status_code == 401
        assert "secret-key" not in str(exc_info.value)
        assert isinstance(exc_info.value.last_error, requests.HTTPError)

    def test_server_error_retried(self) -> None:
        """A 500 followed by success returns the rows."""
        rows = [{"date": "2024-12-31"}]
        source, session = _source(_response(status_code=500), _response(rows))

        assert asyncio.run(source.get_income_statements("NOKIA.HE", 5)) == rows
        assert session.get.call_count == 2

    def test_retry_counts_reported(self) -> None:
        """Attempts per endpoint are kept for the provenance block."""
        source, _ = _source(
            _response(status_code=500),
            _response([{"date": "2024-12-31"}]),
            _response([{"companyName": "Nokia Oyj"}]),
        )
        assert source.fetch_provenance("NOKIA.HE") == {}

        asyncio.run(source.get_income_statements("NOKIA.HE", 5))
        asyncio.run(source.get_profile("NOKIA.HE"))

        assert source.fetch_provenance("NOKIA.HE") == {
            "requests": 2,
            "attempts": 3,
            "total_backoff_seconds": 0.0,
        }
        assert source.fetch_provenance("SAMPO.HE") == {}

    def test_timeout_retried(self) -> None:
        source, session = _source(requests.Timeout("read timed out"), _response([]))
        assert asyncio.run(source.get_balance_sheets("NOKIA.HE", 5)) == []
        assert session.get.call_count == 2

    def test_retries_exhausted(self) -> None:
        """After max_retries + 1 attempts the last error is reported."""
        source, session = _source(
            _response(status_code=503),
            _response(status_code=503),
            _response(status_code=429),
            max_retries=2,
        )

        with pytest.raises(SourceError, match="after 3 attempts") as exc_info:
            asyncio.run(source.get_key_metrics("NOKIA.HE", 5))

        assert session.get.call_count == 3
        assert exc_info.value.status_code == 429


class TestHelpers:
    """Retry classification, backoff and redaction."""

    @pytest.mark.parametrize("status_code", [429, 500, 502, 503])
    def test_retryable_status(self, status_code: int) -> None:
        error = requests.HTTPError(response=MagicMock(status_code=status_code))
        assert _is_retryable_error(error)

    @pytest.mark.parametrize("status_code", [400, 401, 403, 404])
    def test_non_retryable_status(self, status_code: int) -> None:
        error = requests.HTTPError(response=MagicMock(status_code=status_code))
        assert not _is_retryable_error(error)

    def test_connection_error_retryable(self) -> None:
        assert _is_retryable_error(requests.ConnectionError("reset"))

    def test_message_patterns(self) -> None:
        assert _is_retryable_error(RuntimeError("Rate limit reached"))
        assert not _is_retryable_error(ValueError("bad ticker"))

    def test_redact(self) -> None:
        text = _redact("GET https://x/profile/NOKIA.HE?apikey=abc123&limit=5 failed")
        assert "abc123" not in text
        assert "apikey=***&limit=5" in text


class TestBackoff:
    """Exponential backoff with jitter (unpatched)."""

    def test_backoff_bounds(self) -> None:
        # Imported name is the original, not the module attribute patched above
        for attempt in range(6):
            delay = _calculate_backoff(attempt)
            expected = fmp_client._base_delay * (2**attempt)
            assert delay <= fmp_client._max_delay
            assert delay >= min(expected * 0.75, fmp_client._max_delay) - 1e-9
