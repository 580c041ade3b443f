"""
In-memory response cache for query results.
"""

import copy
from typing import Any, Dict, Optional

from shared.logging import get_logger


class ResponseCache:
    """Flat map from request hash to response data.

    Entries are written after a successful query and replaced wholesale on a
    forced refetch. There is no eviction, no TTL and no size bound; entries
    live as long as the owning gateway. Stored and returned values are deep
    copies, so callers never share mutable state with the cache.
    """

    def __init__(self):
        self.logger = get_logger("query_gateway.cache")
        self._entries: Dict[str, Any] = {}

    def get(self, request_hash: str) -> Optional[Any]:
        """Return the cached data for ``request_hash``, or ``None``."""
        data = self._entries.get(request_hash)
        return copy.deepcopy(data) if data is not None else None

    def put(self, request_hash: str, data: Any) -> None:
        """Store ``data`` under ``request_hash``, replacing any previous entry."""
        replaced = request_hash in self._entries
        self._entries[request_hash] = copy.deepcopy(data)
        self.logger.debug("Cached response", request_hash=request_hash, replaced=replaced)

    def __contains__(self, request_hash: object) -> bool:
        return request_hash in self._entries

    def __len__(self) -> int:
        return len(self._entries)
