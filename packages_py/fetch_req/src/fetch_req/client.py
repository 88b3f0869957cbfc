"""
Req session: reusable options shared across calls.
"""
from typing import Any, Dict, Optional, Type, TypeVar

from .config import RequestOptions
from .core.options import apply_options
from .core.request import RequestBuilder, build_request
from .core.retry import execute
from .response import Response
from .types import HttpMethod

T = TypeVar("T")


class Req:
    """
    Request session holding base options.

    The base options are immutable: per-call options are applied to a copy,
    so calls never leak state into each other and one Req may be shared.

    Usage:
        req = Req(Headers({"Accept": "application/json"}), Timeout(5))
        resp = req.get("https://api.example.com/items", Params({"page": 2}))
        items = req.get_json("https://api.example.com/items", target=list[Item])
    """

    def __init__(self, *values: Any, options: Optional[RequestOptions] = None):
        base = options if options is not None else RequestOptions.defaults()
        self._options = apply_options(base, values) if values else base

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "Req":
        """Build a session from a plain config mapping (timeout, retries, debug, headers)."""
        options = RequestOptions.defaults(config)
        if config.get("headers"):
            options = options.with_headers(config["headers"])
        return cls(options=options)

    @property
    def options(self) -> RequestOptions:
        return self._options

    def with_options(self, *values: Any) -> "Req":
        """Return a new session with ``values`` applied on top of these options."""
        return type(self)(options=apply_options(self._options, values))

    def builder(self, url: str = "", method: HttpMethod = "GET") -> RequestBuilder:
        """Fluent builder seeded with this session's options."""
        return RequestBuilder(url, method, options=self._options)

    def request(self, method: HttpMethod, url: str, *values: Any) -> Response:
        """Execute a request with per-call option values."""
        options = apply_options(self._options, values)
        descriptor = build_request(method, url, options)
        return execute(descriptor, retries=options.retries, expect_status=options.expect_status)

    def get(self, url: str, *values: Any) -> Response:
        """Execute GET request."""
        return self.request("GET", url, *values)

    def post(self, url: str, *values: Any) -> Response:
        """Execute POST request."""
        return self.request("POST", url, *values)

    def put(self, url: str, *values: Any) -> Response:
        """Execute PUT request."""
        return self.request("PUT", url, *values)

    def patch(self, url: str, *values: Any) -> Response:
        """Execute PATCH request."""
        return self.request("PATCH", url, *values)

    def delete(self, url: str, *values: Any) -> Response:
        """Execute DELETE request."""
        return self.request("DELETE", url, *values)

    def get_json(self, url: str, *values: Any, target: Optional[Type[T]] = None) -> Any:
        """GET and decode the JSON body, into ``target`` when given."""
        return self.get(url, *values).json(target)

    def post_json(self, url: str, *values: Any, target: Optional[Type[T]] = None) -> Any:
        """POST and decode the JSON body, into ``target`` when given."""
        return self.post(url, *values).json(target)
