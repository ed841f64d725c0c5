"""Exceptions raised by the RING client.

Every failure surfaces as a subclass of :class:`RingError`, so callers can
catch the whole family at once or react to a specific stage of the call.
"""

from __future__ import annotations

from typing import Optional, Union

BODY_FRAGMENT_LIMIT = 512


def body_fragment(body: Union[bytes, str, None], limit: int = BODY_FRAGMENT_LIMIT) -> str:
    """Return a printable, truncated slice of a raw response body."""
    if body is None:
        return ""
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    if len(body) <= limit:
        return body
    return body[:limit] + "..."


class RingError(RuntimeError):
    """Base class for every error raised by this package."""


class InvalidParameter(RingError, ValueError):
    """Raised when a request is built from missing or out-of-range values."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"invalid parameter '{field}': {message}")
        self.field = field
        self.reason = message


class NetworkError(RingError):
    """Raised when the exchange with the service failed below the HTTP status level."""

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class HttpStatusError(RingError):
    """Raised when the service answers with a non-success status code."""

    def __init__(self, status_code: int, body: Union[bytes, str, None] = None, *, url: Optional[str] = None) -> None:
        self.status_code = status_code
        self.body = body_fragment(body)
        self.url = url
        detail = f": {self.body}" if self.body else ""
        super().__init__(f"RING service returned HTTP {status_code}{detail}")


class MalformedResponse(RingError):
    """Raised when a successful response body does not match the expected shape."""

    def __init__(self, message: str, *, location: str = "$", body: Union[bytes, str, None] = None) -> None:
        super().__init__(f"malformed response at {location}: {message}")
        self.location = location
        self.reason = message
        self.body = body_fragment(body)


class ConfigurationError(RingError):
    """Raised when the settings file or an environment override holds an invalid value."""

    def __init__(self, setting: str, message: str) -> None:
        super().__init__(f"invalid setting '{setting}': {message}")
        self.setting = setting
        self.reason = message


class JobFailedError(RingError):
    """Raised when the service reports that a job ended in the error state."""

    def __init__(self, job_id: str) -> None:
        super().__init__(f"RING job {job_id} failed")
        self.job_id = job_id


class JobTimeoutError(RingError):
    """Raised when a job is still running after the allowed number of polls."""

    def __init__(self, job_id: str, polls: int) -> None:
        super().__init__(f"RING job {job_id} did not complete after {polls} status checks")
        self.job_id = job_id
        self.polls = polls


__all__ = [
    "ConfigurationError",
    "HttpStatusError",
    "InvalidParameter",
    "JobFailedError",
    "JobTimeoutError",
    "MalformedResponse",
    "NetworkError",
    "RingError",
    "body_fragment",
]
