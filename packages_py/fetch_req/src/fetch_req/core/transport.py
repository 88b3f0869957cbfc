"""
Transport executor based on httpx.
"""
import json
import logging
from typing import Any, Dict, Mapping

import httpx

from ..errors import TransportError
from ..response import Response
from ..types import RequestDescriptor

logger = logging.getLogger(__name__)

# Constants
LOG_PREFIX = "[FetchReq]"
MAX_LOGGED_BODY = 5000
SENSITIVE_HEADERS = frozenset({"authorization", "proxy-authorization", "cookie", "set-cookie", "x-api-key"})


def _mask_value(val: str) -> str:
    """Mask sensitive value for logging, showing first 10 chars."""
    if not val:
        return "<empty>"
    if len(val) <= 10:
        return "*" * len(val)
    return val[:10] + "*" * (len(val) - 10)


def _mask_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    return {
        k: _mask_value(v) if k.lower() in SENSITIVE_HEADERS else v
        for k, v in headers.items()
    }


def _format_body(body: Any) -> str:
    """
    Format body for logging safeguards against binary data.
    """
    if body is None:
        return "<empty>"
    if isinstance(body, (bytes, bytearray)):
        try:
            body = bytes(body).decode("utf-8")
        except UnicodeDecodeError:
            return f"<binary data: {len(body)} bytes>"
    text = str(body)
    if text.strip().startswith(("{", "[")):
        try:
            text = json.dumps(json.loads(text), indent=2)
        except json.JSONDecodeError:
            pass
    if len(text) > MAX_LOGGED_BODY:
        return text[:MAX_LOGGED_BODY] + "... (truncated)"
    return text


def create_client(descriptor: RequestDescriptor) -> httpx.Client:
    """Create a single-use client. Keep-alive is disabled so no connection outlives the call."""
    kwargs = {
        "timeout": descriptor.timeout,
        "verify": descriptor.verify,
        "limits": httpx.Limits(max_keepalive_connections=0),
        "follow_redirects": True,
        "trust_env": False,
    }
    logger.debug(f"{LOG_PREFIX} Creating httpx.Client with timeout={descriptor.timeout}")
    return httpx.Client(**kwargs)


def send(descriptor: RequestDescriptor) -> Response:
    """Execute one request and return the fully read response."""
    logger.debug(f"{LOG_PREFIX} Request: {descriptor.method} {descriptor.url}")
    if descriptor.debug:
        logger.info(
            f"{LOG_PREFIX} >>> {descriptor.method} {descriptor.url}\n"
            f"headers: {_mask_headers(descriptor.headers)}\n"
            f"body ({descriptor.body_kind}): {_format_body(descriptor.content)}"
        )

    try:
        with create_client(descriptor) as client:
            http_response = client.request(
                method=descriptor.method,
                url=descriptor.url,
                headers=descriptor.headers,
                content=descriptor.content,
            )
            response = Response.from_httpx(http_response)
    except httpx.RequestError as e:
        logger.error(f"{LOG_PREFIX} Request failed: {descriptor.method} {descriptor.url}: {e!r}")
        raise TransportError(
            f"{descriptor.method} {descriptor.url} failed: {e}",
            method=descriptor.method,
            url=descriptor.url,
        ) from e

    if descriptor.debug:
        logger.info(
            f"{LOG_PREFIX} <<< {response.status_code} {descriptor.method} {descriptor.url}\n"
            f"headers: {_mask_headers(response.headers)}\n"
            f"body: {_format_body(response.content)}"
        )
    return response
