"""Use cases for managing browser push subscriptions."""

from .manage import get_subscription, subscribe, unsubscribe

__all__ = ["get_subscription", "subscribe", "unsubscribe"]
