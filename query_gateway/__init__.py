"""
GraphQL query gateway.

A client-side data layer that caches query responses and tells observers
which entity kinds a mutation touched.
"""

from .app.adapters import DynamicFetchOptions, HttpxTransport, StaticFetchOptions, Transport
from .app.caching import ResponseCache
from .app.gateway import RequestGateway
from .app.hashing import hash_request, hash_string
from .app.models import GraphQLRequest, QueryResponse
from .app.subscriptions import SubscriptionRegistry
from .app.typenames import extract_typenames

__all__ = [
    "DynamicFetchOptions",
    "GraphQLRequest",
    "HttpxTransport",
    "QueryResponse",
    "RequestGateway",
    "ResponseCache",
    "StaticFetchOptions",
    "SubscriptionRegistry",
    "Transport",
    "extract_typenames",
    "hash_request",
    "hash_string",
]
