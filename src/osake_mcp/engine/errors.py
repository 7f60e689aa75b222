"""Error taxonomy for aggregation and scoring."""


class OsakeError(Exception):
    """Base class for engine errors."""

    pass


class DataUnavailable(OsakeError):
    """A required series or the profile lookup came back empty."""

    def __init__(self, message: str, ticker: str | None = None):
        super().__init__(message)
        self.ticker = ticker


class SourceError(OsakeError):
    """The data source reported a network or protocol failure."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        last_error: Exception | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.last_error = last_error


class InsufficientData(OsakeError):
    """Scoring was attempted on a record with no years."""

    pass
