"""
Core type definitions for fetch-req.
"""
import ssl
from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Union

# HTTP Methods
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"]

BODYLESS_METHODS = frozenset({"GET", "HEAD", "DELETE", "OPTIONS"})

BodyKind = Literal["none", "form", "json"]

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class Headers(dict):
    """Header option. Merged key by key into previously given headers."""


class Params(dict):
    """Parameter option: query string for GET, JSON or form body for POST."""


@dataclass(frozen=True)
class Timeout:
    """Request timeout option, in seconds."""
    seconds: float


@dataclass(frozen=True)
class ExpectStatus:
    """Expected status code option. A different status counts as a failure."""
    code: int


@dataclass(frozen=True)
class Retries:
    """Total attempt count option. 1 means no retry."""
    count: int


@dataclass(frozen=True)
class Debug:
    """Debug option: log request and response details."""
    enabled: bool = True


@dataclass(frozen=True)
class RequestDescriptor:
    """Fully resolved request, ready for the transport."""
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)
    content: Optional[bytes] = None
    body_kind: BodyKind = "none"
    timeout: float = 10.0
    verify: Union[bool, ssl.SSLContext] = True
    debug: bool = False

    @property
    def has_body(self) -> bool:
        return self.content is not None
