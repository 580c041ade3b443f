"""
Subscription management for mutation change notifications.
"""

from .registry import ChangeCallback, IdProvider, SubscriptionRegistry, uuid4_id_provider

__all__ = ["ChangeCallback", "IdProvider", "SubscriptionRegistry", "uuid4_id_provider"]
