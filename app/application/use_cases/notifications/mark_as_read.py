"""Use case for marking a delivered notification as read."""

from app.domain.entities import NotificationStatus
from app.domain.ports import NotificationStore
from app.domain.state_machine import LifecycleEvent, ensure_transition

from .lookup import get_notification_or_raise
from .results import MarkReadResult


def mark_as_read(store: NotificationStore, notification_id: str) -> MarkReadResult:
    """Mark the notification as read; repeated calls leave it untouched."""

    notification = get_notification_or_raise(store, notification_id, for_update=True)
    if notification.status is NotificationStatus.READ:
        return MarkReadResult(
            notification=notification,
            changed=False,
            message="Notification already marked as read",
        )

    ensure_transition(notification.status, LifecycleEvent.MARK_READ)
    notification.mark_read()
    saved = store.save(notification)
    return MarkReadResult(
        notification=saved,
        changed=True,
        message="Notification marked as read successfully",
    )


__all__ = ["mark_as_read"]
