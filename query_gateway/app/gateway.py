"""
Request gateway: the composition root of the query client.

Queries go serialize -> hash -> cache lookup -> network on a miss -> cache
store. Mutations always go to the network and, on success, broadcast the
typenames found in their response to every subscriber.

Concurrent identical queries are not de-duplicated. Two overlapping calls
for the same uncached request both reach the transport and whichever
completes last owns the cache entry. Callers needing single-flight
behaviour must add it on top.
"""

from contextlib import nullcontext
from typing import Any, List, Mapping, Optional

from shared.config import GatewaySettings, get_settings
from shared.errors import ConfigurationError, NoDataError
from shared.logging import get_logger
from shared.metrics import GatewayMetrics
from shared.tracing import trace_operation

from .adapters import FetchOptions, HttpxTransport, Transport, as_fetch_options
from .caching import ResponseCache
from .hashing import hash_string
from .models import QueryResponse, RequestLike, as_request
from .subscriptions import ChangeCallback, IdProvider, SubscriptionRegistry
from .typenames import DEFAULT_TYPENAME_FIELD, extract_typenames


class RequestGateway:
    """Sends queries and mutations to one GraphQL endpoint."""

    def __init__(
        self,
        url: Optional[str],
        fetch_options: Any = None,
        transport: Optional[Transport] = None,
        id_provider: Optional[IdProvider] = None,
        typename_field: str = DEFAULT_TYPENAME_FIELD,
        isolate_observer_failures: bool = False,
        metrics: Optional[GatewayMetrics] = None
    ):
        if not isinstance(url, str) or not url.strip():
            raise ConfigurationError(
                "Please provide a URL for your GraphQL API",
                details={"url": url}
            )

        self._url = url
        self._fetch_options: FetchOptions = as_fetch_options(fetch_options)
        self._transport: Transport = transport or HttpxTransport()
        self._cache = ResponseCache()
        self._subscriptions = SubscriptionRegistry(
            id_provider=id_provider,
            isolate_failures=isolate_observer_failures
        )
        self.typename_field = typename_field
        self.metrics = metrics
        self.logger = get_logger("query_gateway.gateway")

    @classmethod
    def from_settings(cls, settings: Optional[GatewaySettings] = None, **kwargs) -> "RequestGateway":
        """Build a gateway from ``GatewaySettings`` (environment by default)."""
        settings = settings or get_settings()
        kwargs.setdefault(
            "transport",
            HttpxTransport(timeout=settings.request_timeout, raise_for_status=settings.raise_for_status)
        )
        kwargs.setdefault("typename_field", settings.typename_field)
        kwargs.setdefault("isolate_observer_failures", settings.isolate_observer_failures)
        if "metrics" not in kwargs and settings.enable_metrics:
            kwargs["metrics"] = GatewayMetrics()
        return cls(settings.url, **kwargs)

    @property
    def url(self) -> str:
        return self._url

    @property
    def cache(self) -> ResponseCache:
        return self._cache

    @property
    def subscriptions(self) -> SubscriptionRegistry:
        return self._subscriptions

    def subscribe(self, callback: ChangeCallback) -> str:
        """Register an observer for mutation notifications."""
        subscription_id = self._subscriptions.subscribe(callback)
        self._set_gauge("subscriptions", len(self._subscriptions))
        return subscription_id

    def unsubscribe(self, subscription_id: str) -> None:
        """Remove an observer; unknown ids are ignored."""
        self._subscriptions.unsubscribe(subscription_id)
        self._set_gauge("subscriptions", len(self._subscriptions))

    async def execute_query(self, request: RequestLike, skip_cache: bool = False) -> QueryResponse:
        """Run a query, serving it from the cache unless ``skip_cache`` is set."""
        graphql_request = as_request(request)
        body = graphql_request.serialize()
        request_hash = hash_string(body)

        if not skip_cache:
            cached = self._cache.get(request_hash)
            if cached is not None:
                self._increment("cache_hits_total")
                self.logger.debug("Query served from cache", request_hash=request_hash)
                return QueryResponse(data=cached, type_names=self._typenames(cached))

        self._increment("cache_misses_total")
        response = await self._exchange("query", body, request_hash)
        data = self._require_data("query", response, request_hash)

        self._cache.put(request_hash, data)
        return QueryResponse(data=data, type_names=self._typenames(data))

    async def execute_mutation(self, request: RequestLike) -> Any:
        """Run a mutation and notify subscribers of the typenames it returned."""
        graphql_request = as_request(request)
        body = graphql_request.serialize()
        request_hash = hash_string(body)

        response = await self._exchange("mutation", body, request_hash)
        data = self._require_data("mutation", response, request_hash)

        typenames = self._typenames(data)
        delivered = await self._subscriptions.broadcast(typenames, response)
        self._increment("broadcasts_total")
        self.logger.info(
            "Mutation broadcast",
            request_hash=request_hash,
            typenames=typenames,
            observers=delivered
        )
        return data

    async def _exchange(self, operation: str, body: str, request_hash: str) -> Any:
        options = await self._fetch_options.resolve()
        timer = self.metrics.time_operation("request_duration_seconds", operation=operation) if self.metrics else nullcontext()

        with trace_operation(f"graphql.{operation}", **{"graphql.operation": operation, "graphql.request_hash": request_hash}):
            with timer:
                try:
                    return await self._transport.send(self._url, body, options)
                except Exception as exc:
                    self._increment("requests_total", operation=operation, outcome="error")
                    self.logger.error(
                        "GraphQL transport failed",
                        operation=operation,
                        request_hash=request_hash,
                        error=str(exc)
                    )
                    raise

    def _require_data(self, operation: str, response: Any, request_hash: str) -> Any:
        if isinstance(response, Mapping) and response.get("data") is not None:
            self._increment("requests_total", operation=operation, outcome="success")
            return response["data"]

        self._increment("requests_total", operation=operation, outcome="no_data")
        error = NoDataError.from_response(response)
        self.logger.warning(
            "GraphQL response without data",
            operation=operation,
            request_hash=request_hash,
            details=error.details
        )
        raise error

    def _typenames(self, data: Any) -> List[str]:
        return extract_typenames(data, self.typename_field)

    def _increment(self, metric_name: str, **labels):
        if self.metrics is not None:
            self.metrics.increment_counter(metric_name, **labels)

    def _set_gauge(self, metric_name: str, value: float):
        if self.metrics is not None:
            self.metrics.set_gauge(metric_name, value)
