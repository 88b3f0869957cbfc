"""
Basic usage examples for fetch_req package.

Examples 1-3 only build request descriptors and make no network calls.
"""
import logging

from fetch_req import (
    Debug,
    ExpectStatus,
    FetchReqError,
    Headers,
    Params,
    Req,
    RequestBuilder,
    RequestOptions,
    Retries,
    Timeout,
)
from fetch_req.core import build_request


# =============================================================================
# Example 1: Resolve a GET with params into a descriptor
# =============================================================================
def example1_get_descriptor() -> None:
    """
    >>> desc = build_request("GET", "https://api.example.com/markets",
    ...                      RequestOptions(params={"mode": "extended"}))
    >>> desc.url
    'https://api.example.com/markets?mode=extended'
    """
    desc = build_request(
        "GET",
        "https://api.example.com/markets",
        RequestOptions(params={"mode": "extended", "page": 2}),
    )

    print("Example 1 - GET descriptor:")
    print(f"  url: {desc.url}")
    print(f"  body_kind: {desc.body_kind}")


# =============================================================================
# Example 2: POST params as JSON or form body
# =============================================================================
def example2_post_bodies() -> None:
    params = {"id": 1, "jsonrpc": "2.0", "params": ["f021961"], "method": "filscan.ActorById"}

    as_json = build_request("POST", "https://api.example.com/rpc/v1", RequestOptions(params=params))
    as_form = build_request(
        "POST",
        "https://api.example.com/form",
        RequestOptions(params=params, headers={"Content-Type": "application/x-www-form-urlencoded"}),
    )

    print("Example 2 - POST bodies:")
    print(f"  json: {as_json.content!r}")
    print(f"  form: {as_form.content!r}")


# =============================================================================
# Example 3: Fluent builder
# =============================================================================
def example3_builder() -> None:
    desc = (
        RequestBuilder("https://api.example.com/items", options=RequestOptions())
        .method("POST")
        .header("Authorization", "Bearer token")
        .param("name", "widget")
        .timeout(5.0)
        .verify(False)
        .build()
    )

    print("Example 3 - Builder:")
    print(f"  {desc.method} {desc.url} headers={desc.headers} verify={desc.verify}")


# =============================================================================
# Example 4: Session with retries against a live endpoint
# =============================================================================
def example4_session() -> None:
    req = Req(Headers({"Accept": "application/json"}), Timeout(5), Debug())
    try:
        resp = req.get("https://httpbin.org/get", Params({"q": "fetch"}), ExpectStatus(200), Retries(3))
        print("Example 4 - Session:")
        print(f"  status: {resp.status_code}")
        print(f"  args: {resp.json().get('args')}")
    except FetchReqError as e:
        print(f"Example 4 skipped: {e}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    example1_get_descriptor()
    example2_post_bodies()
    example3_builder()
    example4_session()
