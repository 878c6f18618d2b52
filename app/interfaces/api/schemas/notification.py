"""Pydantic models describing notification payloads.

Field names travel in camelCase (``recipientId``, ``notificationType``...)
to stay compatible with existing clients; snake_case is accepted on input.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel

from app.domain.entities import (
    NotificationDraft,
    NotificationPriority,
    NotificationStatus,
    NotificationType,
)


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


class NotificationCreate(_CamelModel):
    """Payload used to create or schedule a notification."""

    recipient_id: int = Field(..., gt=0, description="Owner of the notification")
    recipient_email: EmailStr | None = None
    recipient_phone: str | None = Field(default=None, max_length=32)
    notification_type: NotificationType
    priority: NotificationPriority = NotificationPriority.MEDIUM
    trigger_event: str | None = Field(default=None, max_length=100)
    subject: str | None = Field(default=None, max_length=255)
    message: str = Field(..., min_length=1)
    scheduled_at: datetime | None = None

    def to_draft(self) -> NotificationDraft:
        return NotificationDraft(
            recipient_id=self.recipient_id,
            notification_type=self.notification_type,
            message=self.message,
            subject=self.subject,
            recipient_email=self.recipient_email,
            recipient_phone=self.recipient_phone,
            priority=self.priority,
            trigger_event=self.trigger_event,
            scheduled_at=self.scheduled_at,
        )


class NotificationUpdate(_CamelModel):
    """Editable fields of an existing notification."""

    notification_id: str = Field(..., min_length=1)
    recipient_email: EmailStr | None = None
    recipient_phone: str | None = Field(default=None, max_length=32)
    message: str | None = Field(default=None, min_length=1)
    subject: str | None = Field(default=None, max_length=255)


class NotificationRead(_CamelModel):
    """Representation of a notification returned to the client."""

    notification_id: str
    recipient_id: int
    recipient_email: str | None = None
    recipient_phone: str | None = None
    notification_type: NotificationType
    priority: NotificationPriority
    trigger_event: str | None = None
    subject: str | None = None
    message: str
    status: NotificationStatus
    scheduled_at: datetime | None = None
    retry_count: int
    max_retries: int
    failure_reason: str | None = None
    failed_at: datetime | None = None
    created_at: datetime | None = None
    sent_at: datetime | None = None
    delivered_at: datetime | None = None


class NotificationStatusRead(_CamelModel):
    notification_id: str
    status: NotificationStatus
    created_at: datetime | None = None
    scheduled_at: datetime | None = None
    sent_at: datetime | None = None
    delivered_at: datetime | None = None
    failed_at: datetime | None = None
    failure_reason: str | None = None
    retry_count: int


class OperationResponse(_CamelModel):
    """Human readable outcome of a lifecycle operation."""

    message: str
    notification_id: str | None = None
    status: NotificationStatus | None = None


class ResendResponse(OperationResponse):
    retry_count: int


class MarkReadResponse(OperationResponse):
    changed: bool


class ExpiryResponse(_CamelModel):
    message: str
    deleted: bool
    deleted_count: int
    cutoff: datetime


__all__ = [
    "ExpiryResponse",
    "MarkReadResponse",
    "NotificationCreate",
    "NotificationRead",
    "NotificationStatusRead",
    "NotificationUpdate",
    "OperationResponse",
    "ResendResponse",
]
