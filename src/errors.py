"""
Error taxonomy for Earnings Pulse.

Engine errors are synchronous precondition violations and are never retried.
Ingestion errors come from the document fetch and short-circuit the engine.
"""

from typing import Optional


class EarningsPulseError(Exception):
    """Base class for all errors raised by this project."""


class EngineError(EarningsPulseError, ValueError):
    """Invalid input reached the analytics engine."""


class InvalidSnapshotError(EngineError):
    """A sentiment value (or tone shift) is NaN or infinite."""


class MalformedTransitionKeyError(EngineError):
    """A transition key does not contain the separator exactly once."""

    def __init__(self, key: str, separator: str):
        self.key = key
        self.separator = separator
        super().__init__(
            f"Malformed transition key {key!r}: expected exactly one {separator!r}"
        )


class MissingQuarterError(EngineError):
    """The selected quarter is not present in the dataset."""

    def __init__(self, quarter: str):
        self.quarter = quarter
        super().__init__(f"Quarter {quarter!r} not found in dataset")


class IngestionError(EarningsPulseError):
    """
    Fetching or parsing a raw document failed.

    Attributes:
        source: Which step failed ("sentiment", "transcripts" or "cache")
        status_code: HTTP status, when the failure was an HTTP response
    """

    def __init__(self, message: str, source: str, status_code: Optional[int] = None):
        self.source = source
        self.status_code = status_code
        super().__init__(message)
