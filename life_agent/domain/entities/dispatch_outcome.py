"""Ephemeral results describing what happened during one dispatch."""

from __future__ import annotations

from dataclasses import dataclass, field

from .notification import Notification


@dataclass
class DeliveryOutcome:
    """Result of pushing a payload to a single subscription endpoint."""

    endpoint: str
    success: bool
    status_code: int | None = None
    endpoint_gone: bool = False
    error: str | None = None


@dataclass
class DispatchOutcome:
    """Per-call result of :meth:`NotificationDispatcher.dispatch`."""

    notification: Notification
    published: bool = False
    deferred: bool = False
    deliveries: list[DeliveryOutcome] = field(default_factory=list)

    @property
    def failed_deliveries(self) -> list[DeliveryOutcome]:
        return [delivery for delivery in self.deliveries if not delivery.success]


__all__ = ["DeliveryOutcome", "DispatchOutcome"]
