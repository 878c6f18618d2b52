"""Domain entity representing a customer notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import uuid4

DEFAULT_MAX_RETRIES = 3
NOTIFICATION_ID_PREFIX = "NOTIF-"


class NotificationStatus(str, Enum):
    """Lifecycle states a notification moves through."""

    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    SENT = "SENT"
    FAILED = "FAILED"
    READ = "READ"


class NotificationType(str, Enum):
    """Delivery channel selected when the notification is created."""

    EMAIL = "EMAIL"
    SMS = "SMS"
    PUSH = "PUSH"


class NotificationPriority(str, Enum):
    """Informational priority attached to a notification."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"


def generate_notification_id() -> str:
    """Return a new externally visible notification identifier."""

    return f"{NOTIFICATION_ID_PREFIX}{uuid4().hex.upper()}"


@dataclass
class NotificationDraft:
    """Caller supplied values used to create or schedule a notification."""

    recipient_id: int
    notification_type: NotificationType
    message: str
    subject: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    priority: NotificationPriority = NotificationPriority.MEDIUM
    trigger_event: str | None = None
    scheduled_at: datetime | None = None
    max_retries: int = DEFAULT_MAX_RETRIES


@dataclass
class Notification:
    """Notification record owned by the lifecycle engine.

    ``status`` is only changed through the ``mark_*``/``reset_for_retry``
    helpers, which keep the failure metadata in step with the status.
    """

    id: int | None
    notification_id: str
    recipient_id: int
    notification_type: NotificationType
    message: str
    status: NotificationStatus
    subject: str | None = None
    recipient_email: str | None = None
    recipient_phone: str | None = None
    priority: NotificationPriority = NotificationPriority.MEDIUM
    trigger_event: str | None = None
    scheduled_at: datetime | None = None
    retry_count: int = 0
    max_retries: int = DEFAULT_MAX_RETRIES
    failure_reason: str | None = None
    failed_at: datetime | None = None
    created_at: datetime | None = None
    sent_at: datetime | None = None
    delivered_at: datetime | None = None
    version: int | None = None

    @classmethod
    def from_draft(
        cls,
        draft: NotificationDraft,
        *,
        status: NotificationStatus,
        created_at: datetime,
    ) -> "Notification":
        """Build a fresh record from ``draft`` with a newly generated id."""

        return cls(
            id=None,
            notification_id=generate_notification_id(),
            recipient_id=draft.recipient_id,
            notification_type=draft.notification_type,
            message=draft.message,
            status=status,
            subject=draft.subject,
            recipient_email=draft.recipient_email,
            recipient_phone=draft.recipient_phone,
            priority=draft.priority,
            trigger_event=draft.trigger_event,
            scheduled_at=draft.scheduled_at if status is NotificationStatus.SCHEDULED else None,
            max_retries=draft.max_retries,
            created_at=created_at,
        )

    @property
    def can_retry(self) -> bool:
        return self.retry_count < self.max_retries

    def contact_for(self, channel: NotificationType) -> str | None:
        """Return the contact address used by ``channel``."""

        if channel is NotificationType.EMAIL:
            return self.recipient_email
        if channel is NotificationType.SMS:
            return self.recipient_phone
        return None

    def mark_sent(self, when: datetime) -> None:
        self.status = NotificationStatus.SENT
        self.sent_at = when
        self.delivered_at = when
        self.failure_reason = None
        self.failed_at = None

    def mark_failed(self, reason: str, when: datetime) -> None:
        self.status = NotificationStatus.FAILED
        self.failure_reason = reason
        self.failed_at = when

    def reset_for_retry(self) -> None:
        """Move a failed record back to PENDING and count the retry."""

        self.retry_count += 1
        self.status = NotificationStatus.PENDING
        self.failure_reason = None
        self.failed_at = None

    def mark_read(self) -> None:
        self.status = NotificationStatus.READ

    def apply_settings(
        self,
        *,
        recipient_email: str | None = None,
        recipient_phone: str | None = None,
        message: str | None = None,
        subject: str | None = None,
    ) -> None:
        """Overwrite the mutable content fields that were provided."""

        if recipient_email is not None:
            self.recipient_email = recipient_email
        if recipient_phone is not None:
            self.recipient_phone = recipient_phone
        if message is not None:
            self.message = message
        if subject is not None:
            self.subject = subject


@dataclass(frozen=True)
class NotificationStatusSnapshot:
    """Lightweight projection of a notification's delivery state."""

    notification_id: str
    status: NotificationStatus
    created_at: datetime | None
    scheduled_at: datetime | None
    sent_at: datetime | None
    delivered_at: datetime | None
    failed_at: datetime | None
    failure_reason: str | None
    retry_count: int

    @classmethod
    def of(cls, notification: Notification) -> "NotificationStatusSnapshot":
        return cls(
            notification_id=notification.notification_id,
            status=notification.status,
            created_at=notification.created_at,
            scheduled_at=notification.scheduled_at,
            sent_at=notification.sent_at,
            delivered_at=notification.delivered_at,
            failed_at=notification.failed_at,
            failure_reason=notification.failure_reason,
            retry_count=notification.retry_count,
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
