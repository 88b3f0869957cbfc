"""
Exception hierarchy for fetch-req.
"""
from typing import Any, Optional


class FetchReqError(Exception):
    """Base error for every failure raised by fetch-req."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url


class InvalidOptionError(FetchReqError, TypeError):
    """An option value of unrecognized type was passed."""

    def __init__(self, option: Any) -> None:
        super().__init__(f"req param invalid: {type(option).__name__} {option!r}")
        self.option = option


class RequestBuildError(FetchReqError):
    """The request could not be constructed (malformed URL, bad body)."""


class EncodeError(RequestBuildError):
    """Params could not be JSON-encoded."""


class TransportError(FetchReqError):
    """Connection, timeout or body read failure."""


class StatusError(FetchReqError):
    """Response carries a non-2xx status code."""

    def __init__(
        self,
        message: str,
        status_code: int,
        method: Optional[str] = None,
        url: Optional[str] = None,
        response: Any = None,
    ) -> None:
        super().__init__(message, method=method, url=url)
        self.status_code = status_code
        self.response = response


class StatusMismatchError(StatusError):
    """Observed status differs from the expected one."""

    def __init__(
        self,
        expected: int,
        status_code: int,
        method: Optional[str] = None,
        url: Optional[str] = None,
        response: Any = None,
    ) -> None:
        super().__init__(
            f"{method} {url}: expected status {expected}, got {status_code}",
            status_code=status_code,
            method=method,
            url=url,
            response=response,
        )
        self.expected = expected


class DecodeError(FetchReqError, ValueError):
    """Response body is not valid JSON or does not match the target shape."""
