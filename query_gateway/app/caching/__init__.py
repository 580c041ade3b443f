"""
Gateway caching package.

Holds the response cache used by ``RequestGateway`` to serve repeated
queries without a network exchange. Mutations never read or write it.
"""

from .response_cache import ResponseCache

__all__ = ["ResponseCache"]
