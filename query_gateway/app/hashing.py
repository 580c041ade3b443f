"""
Request hashing for cache keys.
"""

import hashlib

from .models import GraphQLRequest


def hash_string(value: str) -> str:
    """Map a string to a 32 character hex digest.

    Only determinism and a low collision rate matter here; the digest is a
    cache key and is never used for anything security related.
    """
    return hashlib.md5(value.encode("utf-8")).hexdigest()


def hash_request(request: GraphQLRequest) -> str:
    return hash_string(request.serialize())
