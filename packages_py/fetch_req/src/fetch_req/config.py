"""
Configuration models for fetch-req.
"""
import logging
import ssl
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import httpx
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .env import (
    ENV_DEBUG,
    ENV_RETRIES,
    ENV_TIMEOUT,
    get_ca_bundle_from_env,
    is_ssl_verify_disabled_by_env,
    resolve_bool,
    resolve_float,
    resolve_int,
)
from .errors import RequestBuildError

logger = logging.getLogger(__name__)

# Constants
DEFAULT_TIMEOUT = 10.0
DEFAULT_RETRIES = 1


class TLSConfig(BaseModel):
    """TLS configuration for a request."""
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    verify: bool = True
    ca_bundle: Optional[str] = None
    cert: Optional[Union[str, Tuple[str, str]]] = None
    ssl_context: Optional[ssl.SSLContext] = None

    @model_validator(mode="after")
    def validate_tls_config(self) -> "TLSConfig":
        if self.ssl_context is not None and (self.ca_bundle or self.cert):
            raise ValueError("ssl_context cannot be combined with 'ca_bundle' or 'cert'")
        return self

    def httpx_verify(self) -> Union[bool, ssl.SSLContext]:
        """Value for httpx's ``verify`` argument."""
        if not self.verify:
            return False
        if self.ssl_context is not None:
            return self.ssl_context
        if not self.ca_bundle and not self.cert:
            return True

        try:
            context = ssl.create_default_context(cafile=self.ca_bundle)
            if self.cert:
                if isinstance(self.cert, str):
                    context.load_cert_chain(self.cert)
                else:
                    context.load_cert_chain(*self.cert)
        except (OSError, ssl.SSLError) as e:
            raise RequestBuildError(
                f"TLS setup failed (ca_bundle={self.ca_bundle!r}, cert={self.cert!r}): {e}"
            ) from e
        return context


def default_tls_config() -> Optional[TLSConfig]:
    """TLS settings implied by the environment, or None."""
    if is_ssl_verify_disabled_by_env():
        return TLSConfig(verify=False)
    ca_bundle = get_ca_bundle_from_env()
    if ca_bundle:
        return TLSConfig(ca_bundle=ca_bundle)
    return None


def _read_only(v: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    if v is None:
        return None
    return MappingProxyType(dict(v))


class RequestOptions(BaseModel):
    """Immutable set of options applied to one request.

    ``headers`` and ``params`` are read-only mappings, so a shared
    instance cannot be changed through them.
    """
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    params: Optional[Mapping[str, Any]] = None
    query: Optional[httpx.QueryParams] = None
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0)
    tls: Optional[TLSConfig] = None
    expect_status: Optional[int] = Field(None, ge=100, le=599)
    retries: int = Field(DEFAULT_RETRIES, ge=1)
    debug: bool = False

    @field_validator("headers")
    @classmethod
    def validate_headers(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        for key in v:
            if not key or any(c in key for c in " :\r\n"):
                raise ValueError(f"invalid header name: {key!r}")
        return _read_only(v)

    @field_validator("params")
    @classmethod
    def validate_params(cls, v: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
        return _read_only(v)

    @classmethod
    def defaults(cls, config: Optional[Dict[str, Any]] = None) -> "RequestOptions":
        """Options resolved from environment variables, then ``config``, then defaults.

        Out-of-range values fall back to the default with a warning.
        """
        timeout = resolve_float(ENV_TIMEOUT, config, "timeout", DEFAULT_TIMEOUT)
        if timeout <= 0:
            logger.warning(f"Ignoring non-positive timeout {timeout!r}, using {DEFAULT_TIMEOUT}")
            timeout = DEFAULT_TIMEOUT
        retries = resolve_int(ENV_RETRIES, config, "retries", DEFAULT_RETRIES)
        if retries < 1:
            logger.warning(f"Ignoring retries {retries!r} below 1, using {DEFAULT_RETRIES}")
            retries = DEFAULT_RETRIES
        return cls(
            timeout=timeout,
            retries=retries,
            debug=resolve_bool(ENV_DEBUG, config, "debug", False),
            tls=default_tls_config(),
        )

    def update(self, **changes: Any) -> "RequestOptions":
        """Return a validated copy with ``changes`` replacing fields."""
        data = {name: getattr(self, name) for name in type(self).model_fields}
        data.update(changes)
        return type(self)(**data)

    def with_headers(self, headers: Mapping[str, str]) -> "RequestOptions":
        """Return a copy with ``headers`` merged key by key."""
        return self.update(headers={**self.headers, **headers})

    def header(self, name: str) -> Optional[str]:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for key, value in self.headers.items():
            if key.lower() == lowered:
                return value
        return None

    def httpx_verify(self) -> Union[bool, ssl.SSLContext]:
        if self.tls is None:
            return True
        return self.tls.httpx_verify()
