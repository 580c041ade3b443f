"""
HTTP transport for the query gateway.
"""

from typing import Any, Dict, Mapping, Optional, Protocol

import httpx

from shared.errors import ConfigurationError
from shared.logging import get_logger

DEFAULT_HEADERS = {"Content-Type": "application/json"}

# Options that would change what is sent rather than how.
RESERVED_OPTIONS = ("method", "url", "content", "data", "json", "files", "body")


class Transport(Protocol):
    """Sends a serialized request body and returns the parsed JSON response."""

    async def send(self, url: str, body: str, options: Mapping[str, Any]) -> Any:
        ...


def build_request_kwargs(options: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge caller options over the JSON defaults.

    ``headers`` are merged key by key (case-insensitively) so a caller can add
    an ``Authorization`` header without dropping the content type. Every other
    key is handed to ``httpx.AsyncClient.post`` untouched.
    """
    request_kwargs = dict(options)
    reserved = sorted(key for key in RESERVED_OPTIONS if key in request_kwargs)
    if reserved:
        raise ConfigurationError(
            "Fetch options cannot override the request method or body",
            details={"options": reserved}
        )

    headers = httpx.Headers(DEFAULT_HEADERS)
    headers.update(request_kwargs.pop("headers", None) or {})
    request_kwargs["headers"] = headers
    return request_kwargs


class HttpxTransport:
    """POSTs GraphQL bodies with ``httpx``.

    HTTP error statuses are not raised by default since GraphQL servers
    answer many failures with a 4xx status and an ``errors`` payload; the
    gateway's ``data`` check handles those. Set ``raise_for_status`` to turn
    them into ``httpx.HTTPStatusError`` instead.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        raise_for_status: bool = False,
        client: Optional[httpx.AsyncClient] = None
    ):
        self.timeout = timeout
        self.raise_for_status = raise_for_status
        self._client = client
        self.logger = get_logger("query_gateway.transport")

    async def send(self, url: str, body: str, options: Mapping[str, Any]) -> Any:
        request_kwargs = build_request_kwargs(options)
        content = body.encode("utf-8")

        if self._client is not None:
            response = await self._client.post(url, content=content, **request_kwargs)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, content=content, **request_kwargs)

        self.logger.debug("GraphQL response received", url=url, status_code=response.status_code)

        if self.raise_for_status:
            response.raise_for_status()

        return response.json()
