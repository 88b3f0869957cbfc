"""
Fixed-count retry policy.
"""
import logging
from typing import Optional

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
)

from ..errors import StatusMismatchError, TransportError
from ..response import Response
from ..types import RequestDescriptor
from . import transport

logger = logging.getLogger(__name__)


def _attempt(descriptor: RequestDescriptor, expect_status: Optional[int]) -> Response:
    response = transport.send(descriptor)
    if expect_status is not None and response.status_code != expect_status:
        raise StatusMismatchError(
            expected=expect_status,
            status_code=response.status_code,
            method=descriptor.method,
            url=descriptor.url,
            response=response,
        )
    return response


def execute(
    descriptor: RequestDescriptor,
    retries: int = 1,
    expect_status: Optional[int] = None,
) -> Response:
    """
    Send ``descriptor`` up to ``retries`` times.

    Transport errors and status mismatches are retried immediately, without
    backoff. Other errors propagate on the first attempt. Once attempts are
    exhausted the last error is raised.
    """
    retryer = Retrying(
        stop=stop_after_attempt(max(retries, 1)),
        retry=retry_if_exception_type((TransportError, StatusMismatchError)),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    return retryer(_attempt, descriptor, expect_status)
