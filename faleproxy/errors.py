"""Error taxonomy for the fetch-and-rewrite pipeline.

Every failure that can end a request is a :class:`ProxyError` subclass
tagged with an :class:`ErrorKind`.  The orchestrator turns them into failed
:class:`~faleproxy.transform.TransformResult` values; nothing is retried.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    MISSING_URL = "MissingUrl"
    INVALID_URL = "InvalidUrl"
    FETCH_ERROR = "FetchError"
    UPSTREAM_ERROR = "UpstreamError"
    PARSE_FAILURE = "ParseFailure"


class ProxyError(Exception):
    """Base class for all request-terminating pipeline errors."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingUrlError(ProxyError):
    kind = ErrorKind.MISSING_URL

    def __init__(self, message: str = "URL is required") -> None:
        super().__init__(message)


class InvalidUrlError(ProxyError):
    """The URL is not a well-formed absolute http(s) URL."""

    kind = ErrorKind.INVALID_URL

    def __init__(self, url: str, reason: str = "") -> None:
        message = f"Invalid URL: {url!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
        self.url = url


class FetchError(ProxyError):
    """Transport-level failure: DNS, refused connection, timeout ...

    The underlying ``httpx`` exception is available as ``__cause__``.
    """

    kind = ErrorKind.FETCH_ERROR

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Failed to fetch content: {reason}")
        self.url = url


class UpstreamError(ProxyError):
    """The upstream server answered with a non-2xx status."""

    kind = ErrorKind.UPSTREAM_ERROR

    def __init__(self, url: str, status_code: int) -> None:
        super().__init__(
            f"Failed to fetch content: upstream returned HTTP {status_code}"
        )
        self.url = url
        self.status_code = status_code


class ParseFailure(ProxyError):
    kind = ErrorKind.PARSE_FAILURE

    def __init__(self, reason: str) -> None:
        super().__init__(f"Failed to parse HTML: {reason}")
