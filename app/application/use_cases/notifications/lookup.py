"""Shared lookups for notification use cases."""

from __future__ import annotations

from app.domain.entities import Notification
from app.domain.exceptions import NotificationNotFoundError
from app.domain.ports import NotificationStore


def get_notification_or_raise(
    store: NotificationStore,
    notification_id: str,
    *,
    for_update: bool = False,
) -> Notification:
    """Return the notification or raise :class:`NotificationNotFoundError`.

    Mutating use cases pass ``for_update=True`` so the store serializes
    concurrent changes to the same record.
    """

    if for_update:
        notification = store.find_by_id_for_update(notification_id)
    else:
        notification = store.find_by_id(notification_id)
    if notification is None:
        raise NotificationNotFoundError(
            f"Notification not found: {notification_id}", identifier=notification_id
        )
    return notification


__all__ = ["get_notification_or_raise"]
