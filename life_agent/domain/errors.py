"""Error taxonomy shared by the application layers."""

from __future__ import annotations


class LifeAgentError(Exception):
    """Base class for errors raised by the notification core."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnauthorizedError(LifeAgentError):
    """No identity, or an identity that could not be verified."""


class NotFoundError(LifeAgentError):
    """The record does not exist or belongs to a different user.

    Both cases share one error so callers cannot probe for records owned by
    other users.
    """


class ValidationError(LifeAgentError):
    """A required field is missing or malformed."""


class StoreError(LifeAgentError):
    """A durable store call failed."""


class DeliveryError(LifeAgentError):
    """Announcing or pushing a notification failed.

    ``endpoint_gone`` is set when the push service reported the subscription
    as permanently invalid (HTTP 404 or 410).
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint_gone: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.endpoint_gone = endpoint_gone


__all__ = [
    "DeliveryError",
    "LifeAgentError",
    "NotFoundError",
    "StoreError",
    "UnauthorizedError",
    "ValidationError",
]
