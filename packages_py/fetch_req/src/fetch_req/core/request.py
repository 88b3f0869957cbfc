"""
Request descriptor resolution and the fluent RequestBuilder.
"""
import json
import logging
import ssl
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from ..config import RequestOptions, TLSConfig
from ..errors import EncodeError, RequestBuildError
from ..response import Response
from ..types import BODYLESS_METHODS, FORM_CONTENT_TYPE, HttpMethod, RequestDescriptor
from .options import apply_options
from .retry import execute

logger = logging.getLogger(__name__)

_PRIMITIVES = (str, int, float, bool)


def _primitive(value: Any) -> Any:
    if value is None or isinstance(value, _PRIMITIVES):
        return value
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def encode_params(params: Mapping[str, Any]) -> httpx.QueryParams:
    """
    URL-encode a params mapping. Keys are sorted; list and tuple values
    become repeated keys; values that are not primitives are JSON-encoded.
    """
    items: List[Tuple[str, Any]] = []
    for key in sorted(params):
        value = params[key]
        if isinstance(value, (list, tuple)):
            items.extend((key, _primitive(v)) for v in value)
        else:
            items.append((key, _primitive(value)))
    return httpx.QueryParams(items)


def encode_json(params: Mapping[str, Any], method: str = "", url: str = "") -> bytes:
    """Compact UTF-8 JSON. NaN and Infinity are rejected, they are not valid JSON."""
    try:
        body = json.dumps(dict(params), separators=(",", ":"), ensure_ascii=False, allow_nan=False)
        return body.encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(f"json params failed: {e}", method=method, url=url) from e


def is_form_content_type(value: Optional[str]) -> bool:
    if not value:
        return False
    return value.split(";", 1)[0].strip().lower() == FORM_CONTENT_TYPE


def _parse_url(method: str, url: str) -> httpx.URL:
    try:
        parsed = httpx.URL(url)
    except (httpx.InvalidURL, TypeError) as e:
        raise RequestBuildError(f"new request {method} {url} failed: {e}", method=method, url=url) from e
    if parsed.scheme not in ("http", "https") or not parsed.host:
        raise RequestBuildError(
            f"new request {method} {url} failed: absolute http(s) URL required",
            method=method,
            url=url,
        )
    return parsed


def build_request(method: str, url: str, options: RequestOptions) -> RequestDescriptor:
    """
    Resolve method, URL and options into a RequestDescriptor.

    Bodyless methods put the query into the URL, with pre-encoded query
    values taking precedence over params. Body methods send params as JSON,
    or form-encoded when the Content-Type header says so; pre-encoded query
    values are form-encoded when no params are given.
    """
    method = method.upper()
    parsed = _parse_url(method, url)
    content: Optional[bytes] = None
    body_kind = "none"

    if method in BODYLESS_METHODS:
        query: Optional[httpx.QueryParams] = None
        if options.query is not None:
            query = options.query
        elif options.params is not None:
            query = encode_params(options.params)
        if query is not None:
            parsed = parsed.copy_merge_params(query)
    else:
        if options.params is not None:
            if is_form_content_type(options.header("Content-Type")):
                content = str(encode_params(options.params)).encode("ascii")
                body_kind = "form"
            else:
                content = encode_json(options.params, method, url)
                body_kind = "json"
        elif options.query is not None:
            content = str(options.query).encode("ascii")
            body_kind = "form"

    descriptor = RequestDescriptor(
        method=method,
        url=str(parsed),
        headers=dict(options.headers),
        content=content,
        body_kind=body_kind,
        timeout=options.timeout,
        verify=options.httpx_verify(),
        debug=options.debug,
    )
    logger.debug(f"[FetchReq] Built {method} {descriptor.url} body={body_kind}")
    return descriptor


class RequestBuilder:
    """Fluent builder for one request. Not safe to share between threads."""

    def __init__(
        self,
        url: str = "",
        method: HttpMethod = "GET",
        options: Optional[RequestOptions] = None,
    ):
        self._url = url
        self._method: str = method
        self._base = options if options is not None else RequestOptions.defaults()
        self._changes: Dict[str, Any] = {}
        self._headers: Dict[str, str] = {}
        self._params: Optional[Dict[str, Any]] = None

    def url(self, url: str) -> "RequestBuilder":
        self._url = url
        return self

    def method(self, method: HttpMethod) -> "RequestBuilder":
        self._method = method.upper()
        return self

    def header(self, key: str, value: str) -> "RequestBuilder":
        self._headers[key] = value
        return self

    def headers(self, headers: Dict[str, str]) -> "RequestBuilder":
        self._headers.update(headers)
        return self

    def param(self, key: str, value: Any) -> "RequestBuilder":
        self._ensure_params()[key] = value
        return self

    def params(self, params: Dict[str, Any]) -> "RequestBuilder":
        self._ensure_params().update(params)
        return self

    def query(self, values: Union[httpx.QueryParams, Mapping[str, Any], str]) -> "RequestBuilder":
        """Set pre-encoded query values."""
        self._changes["query"] = values if isinstance(values, httpx.QueryParams) else httpx.QueryParams(values)
        return self

    def timeout(self, seconds: float) -> "RequestBuilder":
        self._changes["timeout"] = seconds
        return self

    def tls(self, tls: Union[TLSConfig, ssl.SSLContext]) -> "RequestBuilder":
        self._changes["tls"] = tls if isinstance(tls, TLSConfig) else TLSConfig(ssl_context=tls)
        return self

    def verify(self, verify: bool) -> "RequestBuilder":
        if not verify:
            # drops any ssl_context, ca_bundle or cert
            self._changes["tls"] = TLSConfig(verify=False)
            return self
        current = self._changes.get("tls") or self._base.tls or TLSConfig()
        self._changes["tls"] = TLSConfig(
            ca_bundle=current.ca_bundle, cert=current.cert, ssl_context=current.ssl_context
        )
        return self

    def expect_status(self, code: int) -> "RequestBuilder":
        self._changes["expect_status"] = code
        return self

    def retries(self, count: int) -> "RequestBuilder":
        self._changes["retries"] = count
        return self

    def debug(self, enabled: bool = True) -> "RequestBuilder":
        self._changes["debug"] = enabled
        return self

    def options(self, *values: Any) -> "RequestBuilder":
        """Apply tagged option values (Headers, Params, Timeout, ...)."""
        self._base = apply_options(self.build_options(), values)
        self._changes = {}
        self._headers = {}
        self._params = None
        return self

    def _ensure_params(self) -> Dict[str, Any]:
        if self._params is None:
            self._params = dict(self._base.params or {})
        return self._params

    def build_options(self) -> RequestOptions:
        """Get the accumulated options."""
        changes = dict(self._changes)
        changes["headers"] = {**self._base.headers, **self._headers}
        if self._params is not None:
            changes["params"] = self._params
        try:
            return self._base.update(**changes)
        except ValidationError as e:
            raise RequestBuildError(f"invalid request options: {e}", method=self._method, url=self._url) from e

    def build(self) -> RequestDescriptor:
        """Get the resolved request descriptor."""
        return build_request(self._method, self._url, self.build_options())

    def send(self) -> Response:
        """Execute the request and return the response."""
        options = self.build_options()
        descriptor = build_request(self._method, self._url, options)
        return execute(descriptor, retries=options.retries, expect_status=options.expect_status)
