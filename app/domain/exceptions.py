"""Errors raised by the notification lifecycle engine.

All errors derive from :class:`NotificationError`, itself a ``ValueError``,
so the API layer can translate them into HTTP responses the same way it
handles any other rejected use case.
"""

from __future__ import annotations


class NotificationError(ValueError):
    """Base class for every error surfaced by notification use cases."""


class NotificationNotFoundError(NotificationError):
    """No notification (or upstream entity) exists for the given identifier."""

    def __init__(self, message: str, *, identifier: str | None = None) -> None:
        super().__init__(message)
        self.identifier = identifier


class NotificationValidationError(NotificationError):
    """The request cannot be honoured as submitted."""


class ScheduleValidationError(NotificationValidationError):
    """The requested delivery time is missing or not in the future."""


class NotificationTypeMismatchError(NotificationValidationError):
    """A channel was invoked for a notification of another type."""


class MissingContactError(NotificationValidationError):
    """The contact field required by the channel is empty."""


class InvalidStateTransitionError(NotificationError):
    """The operation is not allowed from the notification's current status."""

    def __init__(self, message: str, *, current_status: str, event: str) -> None:
        super().__init__(message)
        self.current_status = current_status
        self.event = event


class RetryLimitExceededError(NotificationError):
    """A failed notification has already been resent ``max_retries`` times."""


class ConcurrentUpdateError(NotificationError):
    """Another operation changed the record between its read and its write."""

    def __init__(self, message: str, *, identifier: str) -> None:
        super().__init__(message)
        self.identifier = identifier


class UpstreamServiceError(NotificationError):
    """An upstream collaborator failed or could not be reached."""

    def __init__(self, message: str, *, service: str) -> None:
        super().__init__(message)
        self.service = service


class FeeCalculationError(UpstreamServiceError):
    """The transaction service could not compute the fees."""


class FraudCheckError(UpstreamServiceError):
    """The transaction service could not run the anti-fraud check."""


class DeliveryError(UpstreamServiceError):
    """The delivery gateway rejected the message; the record is now FAILED."""


__all__ = [
    "ConcurrentUpdateError",
    "DeliveryError",
    "FeeCalculationError",
    "FraudCheckError",
    "InvalidStateTransitionError",
    "MissingContactError",
    "NotificationError",
    "NotificationNotFoundError",
    "NotificationTypeMismatchError",
    "NotificationValidationError",
    "RetryLimitExceededError",
    "ScheduleValidationError",
    "UpstreamServiceError",
]
