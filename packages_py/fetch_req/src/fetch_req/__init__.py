"""
Fetch Req - option-driven HTTP requests on top of httpx.
"""
from typing import Any, Optional, Type

__version__ = "0.1.0"

from .config import RequestOptions, TLSConfig
from .types import (
    Debug,
    ExpectStatus,
    Headers,
    HttpMethod,
    Params,
    RequestDescriptor,
    Retries,
    Timeout,
)
from .errors import (
    DecodeError,
    EncodeError,
    FetchReqError,
    InvalidOptionError,
    RequestBuildError,
    StatusError,
    StatusMismatchError,
    TransportError,
)
from .response import Response
from .core.request import RequestBuilder
from .client import Req
from .env import load_env_file


def request(method: HttpMethod, url: str, *values: Any) -> Response:
    """Execute a request with a fresh session and default options."""
    return Req().request(method, url, *values)


def get(url: str, *values: Any) -> Response:
    return Req().get(url, *values)


def get_json(url: str, *values: Any, target: Optional[Type[Any]] = None) -> Any:
    return Req().get_json(url, *values, target=target)


def post(url: str, *values: Any) -> Response:
    return Req().post(url, *values)


def post_json(url: str, *values: Any, target: Optional[Type[Any]] = None) -> Any:
    return Req().post_json(url, *values, target=target)


__all__ = [
    "request", "get", "get_json", "post", "post_json",
    "Req", "RequestBuilder", "Response",
    "RequestOptions", "TLSConfig", "RequestDescriptor", "HttpMethod",
    "Headers", "Params", "Timeout", "ExpectStatus", "Retries", "Debug",
    "FetchReqError", "InvalidOptionError", "RequestBuildError", "EncodeError",
    "TransportError", "StatusError", "StatusMismatchError", "DecodeError",
    "load_env_file",
]
