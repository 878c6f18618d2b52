"""Read-only notification use cases."""

from collections.abc import Sequence

from app.domain.entities import Notification, NotificationStatusSnapshot
from app.domain.ports import NotificationStore

from .lookup import get_notification_or_raise


def fetch_notification(store: NotificationStore, notification_id: str) -> Notification:
    """Return the full notification identified by ``notification_id``."""

    return get_notification_or_raise(store, notification_id)


def get_notification_status(
    store: NotificationStore, notification_id: str
) -> NotificationStatusSnapshot:
    """Return the status and timestamps of a notification."""

    return NotificationStatusSnapshot.of(get_notification_or_raise(store, notification_id))


def get_notification_history(
    store: NotificationStore, recipient_id: int
) -> Sequence[Notification]:
    """Return every notification of ``recipient_id``, newest first."""

    notifications = store.find_by_recipient(recipient_id)
    return sorted(
        notifications,
        key=lambda notification: (notification.created_at is not None, notification.created_at),
        reverse=True,
    )


__all__ = [
    "fetch_notification",
    "get_notification_history",
    "get_notification_status",
]
