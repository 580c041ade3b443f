"""
Adapters package for the query gateway.

Contains the transport boundary and the fetch options passed to it:

- Transport: protocol every transport satisfies
- HttpxTransport: the shipped ``httpx`` implementation
- StaticFetchOptions / DynamicFetchOptions: per-call request options

Adapters do not retry and do not wrap errors; whatever the HTTP layer raises
reaches the caller as is.
"""

from .fetch_options import (
    DynamicFetchOptions,
    FetchOptions,
    StaticFetchOptions,
    as_fetch_options,
)
from .transport import DEFAULT_HEADERS, HttpxTransport, Transport, build_request_kwargs

__all__ = [
    "DEFAULT_HEADERS",
    "DynamicFetchOptions",
    "FetchOptions",
    "HttpxTransport",
    "StaticFetchOptions",
    "Transport",
    "as_fetch_options",
    "build_request_kwargs",
]
