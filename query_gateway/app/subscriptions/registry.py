"""
Subscription registry for mutation change notifications.
"""

import inspect
import uuid
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from shared.errors import ConfigurationError
from shared.logging import get_logger

ChangeCallback = Callable[[List[str], Any], Union[None, Awaitable[None]]]
IdProvider = Callable[[], str]


def uuid4_id_provider() -> str:
    """Default subscription id provider."""
    return str(uuid.uuid4())


class SubscriptionRegistry:
    """Maps subscription ids to change callbacks and fans out notifications.

    With ``isolate_failures`` off, the first observer that raises stops the
    broadcast and its exception propagates to the caller. With it on, every
    observer is called, failures are logged, and the first failure is raised
    once all observers have run.
    """

    def __init__(self, id_provider: Optional[IdProvider] = None, isolate_failures: bool = False):
        self.logger = get_logger("query_gateway.subscriptions")
        self.id_provider = id_provider or uuid4_id_provider
        self.isolate_failures = isolate_failures
        self._callbacks: Dict[str, ChangeCallback] = {}

    def subscribe(self, callback: ChangeCallback) -> str:
        """Register ``callback`` and return its subscription id."""
        if not callable(callback):
            raise TypeError("Subscription callback must be callable")

        subscription_id = self.id_provider()
        if subscription_id in self._callbacks:
            raise ConfigurationError(
                "Subscription id provider returned a duplicate id",
                details={"subscription_id": subscription_id}
            )

        self._callbacks[subscription_id] = callback
        self.logger.info("Subscription created", subscription_id=subscription_id, total=len(self._callbacks))
        return subscription_id

    def unsubscribe(self, subscription_id: str) -> None:
        """Remove a subscription; unknown ids are ignored."""
        if self._callbacks.pop(subscription_id, None) is not None:
            self.logger.info("Subscription removed", subscription_id=subscription_id, total=len(self._callbacks))

    async def broadcast(self, typenames: List[str], response: Any) -> int:
        """Invoke every registered callback with ``(typenames, response)``.

        Callbacks registered or removed while the broadcast is running do not
        change who gets this notification.
        """
        snapshot = list(self._callbacks.items())
        first_error: Optional[BaseException] = None

        for subscription_id, callback in snapshot:
            try:
                result = callback(typenames, response)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                if not self.isolate_failures:
                    raise
                self.logger.exception(
                    "Subscriber callback failed",
                    subscription_id=subscription_id,
                    error=str(exc)
                )
                if first_error is None:
                    first_error = exc

        if first_error is not None:
            raise first_error

        self.logger.debug("Broadcast delivered", typenames=typenames, observers=len(snapshot))
        return len(snapshot)

    def __contains__(self, subscription_id: object) -> bool:
        return subscription_id in self._callbacks

    def __len__(self) -> int:
        return len(self._callbacks)
