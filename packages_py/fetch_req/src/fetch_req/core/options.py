"""
Option dispatcher: folds a list of tagged option values into RequestOptions.
"""
import logging
import ssl
from typing import Any, Dict, Iterable, Optional

import httpx
from pydantic import ValidationError

from ..config import RequestOptions, TLSConfig
from ..errors import InvalidOptionError, RequestBuildError
from ..types import Debug, ExpectStatus, Headers, Params, Retries, Timeout

logger = logging.getLogger(__name__)


def apply_options(base: Optional[RequestOptions], values: Iterable[Any]) -> RequestOptions:
    """
    Apply each option value onto ``base`` and return the resulting options.

    The last value of a given kind wins, except ``Headers`` which merge key
    by key. ``base`` is never modified. Raises InvalidOptionError for any
    value whose type is not one of the option tags.
    """
    options = base if base is not None else RequestOptions()
    changes: Dict[str, Any] = {}
    headers: Dict[str, str] = dict(options.headers)

    for value in values:
        if isinstance(value, Headers):
            headers.update(value)
        elif isinstance(value, Params):
            changes["params"] = dict(value)
        elif isinstance(value, httpx.QueryParams):
            changes["query"] = value
        elif isinstance(value, Timeout):
            changes["timeout"] = value.seconds
        elif isinstance(value, TLSConfig):
            changes["tls"] = value
        elif isinstance(value, ssl.SSLContext):
            changes["tls"] = TLSConfig(ssl_context=value)
        elif isinstance(value, ExpectStatus):
            changes["expect_status"] = value.code
        elif isinstance(value, Retries):
            changes["retries"] = value.count
        elif isinstance(value, Debug):
            changes["debug"] = value.enabled
        else:
            logger.debug(f"Rejecting option of type {type(value).__name__}")
            raise InvalidOptionError(value)

    changes["headers"] = headers
    try:
        return options.update(**changes)
    except ValidationError as e:
        raise RequestBuildError(f"invalid request options: {e}") from e
