"""Exception types raised by the archiver."""

from __future__ import annotations


class ArchiverError(Exception):
    """Base class for every archiver failure."""


class ConfigurationError(ArchiverError):
    """Bad or missing setup detected before crawling starts.

    ``hint`` carries the remediation lines shown to the user.
    """

    def __init__(self, message: str, hint: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.hint = hint


class TransferIntegrityError(ArchiverError):
    """A download never matched its declared content length."""

    def __init__(self, url: str, attempts: int) -> None:
        super().__init__(f"Failed to fetch buffer for {url} after {attempts} attempts")
        self.url = url
        self.attempts = attempts


class MissingFieldError(ArchiverError):
    """An expected element is absent from a submission page."""

    def __init__(self, field: str, url: str | None = None) -> None:
        where = f" on {url}" if url else ""
        super().__init__(f"Missing field '{field}'{where}")
        self.field = field
        self.url = url


class RetryExhausted(ArchiverError):
    """Raised by RetryPolicy when no attempt produced an acceptable result."""

    def __init__(self, attempts: int, last_result: object = None) -> None:
        super().__init__(f"Gave up after {attempts} attempts")
        self.attempts = attempts
        self.last_result = last_result
