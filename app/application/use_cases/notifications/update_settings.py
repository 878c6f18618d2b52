"""Use case for updating the editable fields of a notification."""

from app.domain.entities import Notification
from app.domain.ports import NotificationStore

from .lookup import get_notification_or_raise


def update_notification_settings(
    store: NotificationStore,
    *,
    notification_id: str,
    recipient_email: str | None = None,
    recipient_phone: str | None = None,
    message: str | None = None,
    subject: str | None = None,
) -> Notification:
    """Update contact and content fields.

    Identifier, status, recipient and creation time are never touched.
    """

    notification = get_notification_or_raise(store, notification_id, for_update=True)
    notification.apply_settings(
        recipient_email=recipient_email,
        recipient_phone=recipient_phone,
        message=message,
        subject=subject,
    )
    return store.save(notification)


__all__ = ["update_notification_settings"]
