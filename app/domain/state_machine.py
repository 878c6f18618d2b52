"""Allowed status transitions for notifications."""

from __future__ import annotations

from enum import Enum
from typing import Final, Mapping

from app.domain.entities.notification import NotificationStatus
from app.domain.exceptions import InvalidStateTransitionError


class LifecycleEvent(str, Enum):
    """Events that move a notification between statuses."""

    SEND_SUCCEEDED = "send_succeeded"
    SEND_FAILED = "send_failed"
    RESEND = "resend"
    MARK_READ = "mark_read"


_TRANSITIONS: Final[Mapping[NotificationStatus, Mapping[LifecycleEvent, NotificationStatus]]] = {
    NotificationStatus.PENDING: {
        LifecycleEvent.SEND_SUCCEEDED: NotificationStatus.SENT,
        LifecycleEvent.SEND_FAILED: NotificationStatus.FAILED,
    },
    # The external due-time trigger sends scheduled records directly.
    NotificationStatus.SCHEDULED: {
        LifecycleEvent.SEND_SUCCEEDED: NotificationStatus.SENT,
        LifecycleEvent.SEND_FAILED: NotificationStatus.FAILED,
    },
    NotificationStatus.FAILED: {
        LifecycleEvent.RESEND: NotificationStatus.PENDING,
    },
    NotificationStatus.SENT: {
        LifecycleEvent.MARK_READ: NotificationStatus.READ,
    },
    NotificationStatus.READ: {
        LifecycleEvent.MARK_READ: NotificationStatus.READ,
    },
}

_CONFLICT_MESSAGES: Final[Mapping[LifecycleEvent, str]] = {
    LifecycleEvent.SEND_SUCCEEDED: "Notification cannot be sent while in {status} status",
    LifecycleEvent.SEND_FAILED: "Notification cannot be sent while in {status} status",
    LifecycleEvent.RESEND: "Notification is not in FAILED status",
    LifecycleEvent.MARK_READ: "Notification cannot be marked as read while in {status} status",
}


def next_status(current: NotificationStatus, event: LifecycleEvent) -> NotificationStatus | None:
    """Return the target status for ``event`` or ``None`` when not allowed."""

    return _TRANSITIONS.get(current, {}).get(event)


def ensure_transition(current: NotificationStatus, event: LifecycleEvent) -> NotificationStatus:
    """Return the target status or raise :class:`InvalidStateTransitionError`."""

    target = next_status(current, event)
    if target is None:
        message = _CONFLICT_MESSAGES[event].format(status=current.value)
        raise InvalidStateTransitionError(
            message, current_status=current.value, event=event.value
        )
    return target


def ensure_sendable(current: NotificationStatus) -> None:
    """Validate that a delivery attempt may start from ``current``."""

    ensure_transition(current, LifecycleEvent.SEND_SUCCEEDED)


__all__ = [
    "LifecycleEvent",
    "ensure_sendable",
    "ensure_transition",
    "next_status",
]
