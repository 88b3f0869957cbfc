"""
Response wrapper.
"""
import json
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type, TypeVar, overload

import httpx
from pydantic import TypeAdapter, ValidationError

from .errors import DecodeError, StatusError

T = TypeVar("T")


@dataclass(frozen=True)
class Response:
    """
    Fully read HTTP response.

    The body is held in memory; nothing needs closing. ``json()`` decodes
    again on every call.
    """
    status_code: int
    content: bytes
    headers: Dict[str, str] = field(default_factory=dict)
    url: str = ""
    method: str = ""

    @classmethod
    def from_httpx(cls, response: httpx.Response) -> "Response":
        return cls(
            status_code=response.status_code,
            content=response.content,
            headers=dict(response.headers),
            url=str(response.url),
            method=response.request.method,
        )

    @property
    def ok(self) -> bool:
        """Check if request was successful (2xx status)."""
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        """Body decoded as UTF-8; invalid bytes are replaced."""
        return self.content.decode("utf-8", errors="replace")

    def bytes(self) -> bytes:
        return self.content

    @overload
    def json(self) -> Any: ...

    @overload
    def json(self, target: Type[T]) -> T: ...

    def json(self, target: Optional[Type[Any]] = None) -> Any:
        """
        Decode the body as JSON.

        Without ``target`` the parsed value is returned as is. With a target
        type (pydantic model, dataclass, ``dict[str, int]``, ...) the body is
        validated into that type.

        Raises:
            DecodeError: body is not valid JSON or does not match ``target``.
        """
        if target is None:
            try:
                return json.loads(self.content)
            except (ValueError, UnicodeDecodeError) as e:
                raise DecodeError(f"json decode failed: {e}", method=self.method, url=self.url) from e

        try:
            return TypeAdapter(target).validate_json(self.content)
        except ValidationError as e:
            raise DecodeError(f"json decode into {getattr(target, '__name__', target)} failed: {e}",
                              method=self.method, url=self.url) from e

    def raise_for_status(self) -> None:
        """Raise StatusError if status is not 2xx."""
        if not self.ok:
            raise StatusError(
                f"HTTP {self.status_code} for {self.method} {self.url}",
                status_code=self.status_code,
                method=self.method,
                url=self.url,
                response=self,
            )
