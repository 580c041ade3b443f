"""
Test helper functions and factory methods for the GraphQL query gateway.
"""

import asyncio
import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional


@dataclass
class RecordedCall:
    """One call made to a ``RecordingTransport``."""
    url: str
    body: str
    options: Dict[str, Any]


@dataclass
class RecordingTransport:
    """Transport fake that records calls and replays queued responses.

    Queued items are returned in order; the last one repeats once the queue
    is exhausted. Exceptions in the queue are raised instead of returned.
    ``gate`` lets a test hold every call until it sets the event.
    """
    responses: List[Any] = field(default_factory=list)
    calls: List[RecordedCall] = field(default_factory=list)
    gate: Optional[asyncio.Event] = None

    async def send(self, url: str, body: str, options: Mapping[str, Any]) -> Any:
        self.calls.append(RecordedCall(url=url, body=body, options=dict(options)))
        index = len(self.calls) - 1
        if self.gate is not None:
            await self.gate.wait()
        if not self.responses:
            raise AssertionError("RecordingTransport has no queued response")
        result = self.responses[min(index, len(self.responses) - 1)]
        if isinstance(result, BaseException):
            raise result
        return result

    @property
    def call_count(self) -> int:
        return len(self.calls)


class SequentialIdProvider:
    """Deterministic subscription id provider: ``sub-1``, ``sub-2``, ..."""

    def __init__(self, prefix: str = "sub"):
        self.prefix = prefix
        self._counter = itertools.count(1)

    def __call__(self) -> str:
        return f"{self.prefix}-{next(self._counter)}"


def create_user_payload(name: str = "Ann", user_id: str = "user-1") -> Dict[str, Any]:
    """Create a query response carrying a single ``User``."""
    return {"data": {"user": {"__typename": "User", "id": user_id, "name": name}}}


def create_mutation_payload() -> Dict[str, Any]:
    """Create a mutation response touching ``Post`` and ``User`` entities."""
    return {
        "data": {
            "createPost": {
                "__typename": "Post",
                "id": "post-1",
                "title": "Hello",
                "author": {"__typename": "User", "id": "user-1"},
                "tags": [{"__typename": "Tag", "name": "intro"}],
            }
        }
    }
