"""
Tests for Req and the package-level functions.
"""
import json
from dataclasses import dataclass
from typing import List

import httpx
import pytest
import respx
from pydantic import BaseModel

import fetch_req
from fetch_req import (
    DecodeError,
    ExpectStatus,
    Headers,
    InvalidOptionError,
    Params,
    Req,
    RequestBuildError,
    RequestOptions,
    Retries,
    StatusMismatchError,
    Timeout,
    TransportError,
)

API = "https://api.example.com"


class Market(BaseModel):
    id: int
    name: str


@dataclass
class RpcResult:
    jsonrpc: str
    result: List[str]


@respx.mock
def test_get_without_options():
    route = respx.get(f"{API}/api/v1/bank_markets").respond(200, text="ok")

    resp = fetch_req.get(f"{API}/api/v1/bank_markets?mode=extended")

    assert resp.status_code == 200
    assert resp.text == "ok"
    request = route.calls.last.request
    assert request.method == "GET"
    assert request.url.params["mode"] == "extended"
    assert request.content == b""


@respx.mock
def test_get_returns_actual_status():
    respx.get(f"{API}/missing").respond(404, text="not found")

    resp = fetch_req.get(f"{API}/missing")

    assert resp.status_code == 404
    assert resp.ok is False


@respx.mock
def test_get_with_params_and_headers():
    route = respx.get(f"{API}/items").respond(200, json=[])

    fetch_req.get(f"{API}/items", Params({"page": 2, "q": "a b"}), Headers({"X-Token": "t"}))

    request = route.calls.last.request
    assert request.url.query == b"page=2&q=a+b"
    assert request.headers["X-Token"] == "t"


@respx.mock
def test_post_params_as_json():
    route = respx.post(f"{API}/rpc/v1").respond(200, json={"jsonrpc": "2.0", "result": ["ok"]})
    params = Params({
        "id": 1,
        "jsonrpc": "2.0",
        "params": ["f021961"],
        "method": "filscan.ActorById",
    })

    resp = fetch_req.post(f"{API}/rpc/v1", params)

    request = route.calls.last.request
    assert json.loads(request.content) == dict(params)
    assert "content-type" not in request.headers
    assert resp.json() == {"jsonrpc": "2.0", "result": ["ok"]}


@respx.mock
def test_post_params_as_form():
    route = respx.post(f"{API}/form").respond(200)

    fetch_req.post(
        f"{API}/form",
        Params({"name": "x", "id": 1}),
        Headers({"Content-Type": "application/x-www-form-urlencoded"}),
    )

    request = route.calls.last.request
    assert request.content == b"id=1&name=x"
    assert request.headers["content-type"] == "application/x-www-form-urlencoded"


@respx.mock
def test_post_query_values_as_form():
    route = respx.post(f"{API}/form").respond(200)

    fetch_req.post(f"{API}/form", httpx.QueryParams({"a": "1"}))

    assert route.calls.last.request.content == b"a=1"


@respx.mock
def test_get_json_into_model():
    respx.get(f"{API}/markets/1").respond(200, json={"id": 1, "name": "BTC"})

    market = fetch_req.get_json(f"{API}/markets/1", target=Market)

    assert market == Market(id=1, name="BTC")


@respx.mock
def test_post_json_into_dataclass():
    respx.post(f"{API}/rpc").respond(200, json={"jsonrpc": "2.0", "result": ["a", "b"]})

    result = fetch_req.post_json(f"{API}/rpc", Params({"id": 1}), target=RpcResult)

    assert result == RpcResult(jsonrpc="2.0", result=["a", "b"])


@respx.mock
def test_get_json_decode_error():
    respx.get(f"{API}/html").respond(200, text="<html></html>")

    with pytest.raises(DecodeError):
        fetch_req.get_json(f"{API}/html")


@respx.mock
def test_get_json_shape_mismatch():
    respx.get(f"{API}/markets/1").respond(200, json={"id": "one"})

    with pytest.raises(DecodeError):
        fetch_req.get_json(f"{API}/markets/1", target=Market)


def test_invalid_option_fails_before_sending():
    with respx.mock(assert_all_called=False) as mock:
        route = mock.get(f"{API}/x").respond(200)

        with pytest.raises(InvalidOptionError):
            fetch_req.get(f"{API}/x", 42)

        assert not route.called


@respx.mock
def test_transport_error():
    respx.get(f"{API}/down").mock(side_effect=httpx.ConnectError)

    with pytest.raises(TransportError) as exc:
        fetch_req.get(f"{API}/down")

    assert isinstance(exc.value.__cause__, httpx.ConnectError)
    assert exc.value.method == "GET"


@respx.mock
def test_timeout_is_transport_error():
    respx.get(f"{API}/slow").mock(side_effect=httpx.ReadTimeout)

    with pytest.raises(TransportError):
        fetch_req.get(f"{API}/slow", Timeout(0.1))


@respx.mock
def test_expect_status_with_retries():
    route = respx.get(f"{API}/flaky").respond(503)

    with pytest.raises(StatusMismatchError) as exc:
        fetch_req.get(f"{API}/flaky", ExpectStatus(200), Retries(3))

    assert route.call_count == 3
    assert exc.value.expected == 200
    assert exc.value.status_code == 503


class TestReq:

    @respx.mock
    def test_session_headers_are_sent(self):
        route = respx.get(f"{API}/me").respond(200)
        req = Req(Headers({"Authorization": "Bearer t"}))

        req.get(f"{API}/me")

        assert route.calls.last.request.headers["Authorization"] == "Bearer t"

    @respx.mock
    def test_per_call_options_do_not_leak(self):
        route = respx.get(f"{API}/me").respond(200)
        req = Req(Headers({"A": "1"}))

        req.get(f"{API}/me", Headers({"B": "2"}), Params({"x": 1}))
        req.get(f"{API}/me")

        last = route.calls.last.request
        assert last.headers["A"] == "1"
        assert "B" not in last.headers
        assert last.url.query == b""
        assert req.options.headers == {"A": "1"}
        assert req.options.params is None

    def test_with_options_returns_new_session(self):
        req = Req(options=RequestOptions())
        other = req.with_options(Timeout(3), Headers({"A": "1"}))

        assert other is not req
        assert other.options.timeout == 3
        assert req.options.timeout == 10.0
        assert req.options.headers == {}

    def test_from_config(self):
        req = Req.from_config({"timeout": 4, "retries": "2", "headers": {"Accept": "application/json"}})

        assert req.options.timeout == 4.0
        assert req.options.retries == 2
        assert req.options.headers == {"Accept": "application/json"}

    @respx.mock
    def test_builder_send(self):
        route = respx.put(f"{API}/items/1").respond(200, json={"id": 1, "name": "x"})
        req = Req(Headers({"A": "1"}))

        resp = req.builder(f"{API}/items/1", "PUT").param("name", "x").send()

        request = route.calls.last.request
        assert request.headers["A"] == "1"
        assert json.loads(request.content) == {"name": "x"}
        assert resp.json(Market).name == "x"

    @respx.mock
    def test_patch_and_delete(self):
        patch_route = respx.patch(f"{API}/items/1").respond(200)
        delete_route = respx.delete(f"{API}/items/1").respond(204)
        req = Req()

        req.patch(f"{API}/items/1", Params({"name": "y"}))
        resp = req.delete(f"{API}/items/1", Params({"force": True}))

        assert json.loads(patch_route.calls.last.request.content) == {"name": "y"}
        assert delete_route.calls.last.request.url.params["force"] == "true"
        assert resp.status_code == 204

    def test_session_options_cannot_be_mutated(self):
        req = Req(Headers({"A": "1"}), Params({"x": 1}))

        with pytest.raises(TypeError):
            req.options.headers["A"] = "changed"
        with pytest.raises(TypeError):
            req.options.params["y"] = 2

        assert req.options.headers == {"A": "1"}
        assert req.options.params == {"x": 1}


@respx.mock
def test_bad_ca_bundle_from_env_is_build_error(monkeypatch):
    route = respx.get(f"{API}/me").respond(200)
    monkeypatch.setenv("SSL_CERT_FILE", "/nonexistent/ca.pem")

    with pytest.raises(RequestBuildError):
        fetch_req.get(f"{API}/me")

    assert not route.called
