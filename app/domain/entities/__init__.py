"""Domain entities exposed by the application."""

from .notification import (
    DEFAULT_MAX_RETRIES,
    Notification,
    NotificationDraft,
    NotificationPriority,
    NotificationStatus,
    NotificationStatusSnapshot,
    NotificationType,
    generate_notification_id,
)

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "Notification",
    "NotificationDraft",
    "NotificationPriority",
    "NotificationStatus",
    "NotificationStatusSnapshot",
    "NotificationType",
    "generate_notification_id",
]
