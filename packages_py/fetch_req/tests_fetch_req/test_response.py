"""
Tests for Response.
"""
import json
from typing import Dict, List

import pytest
from pydantic import BaseModel
from fetch_req.errors import DecodeError, StatusError
from fetch_req.response import Response


class Item(BaseModel):
    id: int
    tags: List[str] = []


def test_text_and_bytes():
    resp = Response(status_code=200, content="héllo".encode("utf-8"))
    assert resp.text == "héllo"
    assert resp.bytes() == "héllo".encode("utf-8")


def test_text_replaces_invalid_utf8():
    resp = Response(status_code=200, content=b"ok\xff")
    assert resp.text == "ok�"


def test_json_without_target():
    resp = Response(status_code=200, content=b'{"a": [1, 2]}')
    assert resp.json() == {"a": [1, 2]}


def test_json_decodes_every_call():
    resp = Response(status_code=200, content=b'{"a": 1}')
    first = resp.json()
    first["a"] = 2
    assert resp.json() == {"a": 1}


def test_json_into_model_round_trip():
    item = Item(id=3, tags=["x"])
    resp = Response(status_code=200, content=item.model_dump_json().encode())
    assert resp.json(Item) == item


def test_json_into_generic_type():
    resp = Response(status_code=200, content=json.dumps({"a": 1, "b": 2}).encode())
    assert resp.json(Dict[str, int]) == {"a": 1, "b": 2}


def test_json_malformed():
    resp = Response(status_code=200, content=b"{not json", url="https://x/api", method="GET")
    with pytest.raises(DecodeError) as exc:
        resp.json()
    assert exc.value.url == "https://x/api"
    assert isinstance(exc.value, ValueError)


def test_json_malformed_with_target():
    resp = Response(status_code=200, content=b"{not json")
    with pytest.raises(DecodeError):
        resp.json(Item)


def test_json_shape_mismatch():
    resp = Response(status_code=200, content=b'{"id": "abc"}')
    with pytest.raises(DecodeError):
        resp.json(Item)


@pytest.mark.parametrize("status, ok", [(200, True), (204, True), (301, False), (404, False), (500, False)])
def test_ok(status, ok):
    assert Response(status_code=status, content=b"").ok is ok


def test_raise_for_status():
    Response(status_code=201, content=b"").raise_for_status()

    resp = Response(status_code=500, content=b"boom", url="https://x/api", method="POST")
    with pytest.raises(StatusError) as exc:
        resp.raise_for_status()
    assert exc.value.status_code == 500
    assert exc.value.response is resp
    assert "HTTP 500" in str(exc.value)
