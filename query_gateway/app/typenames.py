"""
Typename extraction from response payloads.

Response data is a JSON tree: mappings, sequences and scalars. Every mapping
may carry a discriminator field (``__typename`` in GraphQL) naming the kind of
entity it represents. Mutations report the kinds found in their response so
observers can work out which cached queries are stale.
"""

from typing import Any, List, Mapping

DEFAULT_TYPENAME_FIELD = "__typename"


def extract_typenames(value: Any, typename_field: str = DEFAULT_TYPENAME_FIELD) -> List[str]:
    """Collect every distinct typename found anywhere in ``value``.

    The result is deduplicated and ordered by first appearance in a
    depth-first walk; callers should treat it as a set.
    """
    found: List[str] = []
    seen = set()
    _collect(value, typename_field, found, seen)
    return found


def _collect(node: Any, typename_field: str, found: List[str], seen: set) -> None:
    if isinstance(node, Mapping):
        kind = node.get(typename_field)
        if isinstance(kind, str) and kind not in seen:
            seen.add(kind)
            found.append(kind)
        for key, child in node.items():
            if key != typename_field:
                _collect(child, typename_field, found, seen)
    elif isinstance(node, (list, tuple)):
        for child in node:
            _collect(child, typename_field, found, seen)
    # scalars and None carry no kinds
