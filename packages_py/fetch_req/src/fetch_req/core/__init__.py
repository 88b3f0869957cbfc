"""
Request resolution, transport and retry.
"""
from .options import apply_options
from .request import RequestBuilder, build_request, encode_params
from .retry import execute
from .transport import send

__all__ = [
    "apply_options",
    "RequestBuilder",
    "build_request",
    "encode_params",
    "execute",
    "send",
]
