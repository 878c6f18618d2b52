"""Use cases for creating and scheduling notifications."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime

from app.domain.entities import Notification, NotificationDraft, NotificationStatus
from app.domain.exceptions import ScheduleValidationError
from app.domain.ports import NotificationStore
from app.utils import ensure_app_timezone, now_in_app_timezone

logger = logging.getLogger(__name__)


def create_notification(
    store: NotificationStore,
    draft: NotificationDraft,
    *,
    now: datetime | None = None,
) -> Notification:
    """Persist a new PENDING notification built from ``draft``."""

    created_at = ensure_app_timezone(now) or now_in_app_timezone()
    notification = Notification.from_draft(
        draft, status=NotificationStatus.PENDING, created_at=created_at
    )
    saved = store.save(notification)
    logger.info(
        "Created %s notification %s for recipient %s",
        saved.notification_type.value,
        saved.notification_id,
        saved.recipient_id,
    )
    return saved


def schedule_notification(
    store: NotificationStore,
    draft: NotificationDraft,
    *,
    now: datetime | None = None,
) -> Notification:
    """Persist a SCHEDULED notification for a delivery time in the future.

    Promotion at the due time is driven by an external trigger that calls the
    send use cases; nothing here watches the clock.
    """

    current_time = ensure_app_timezone(now) or now_in_app_timezone()
    if draft.scheduled_at is None:
        raise ScheduleValidationError("Scheduled time must be provided")

    scheduled_at = ensure_app_timezone(draft.scheduled_at)
    if scheduled_at <= current_time:
        raise ScheduleValidationError("Scheduled time must be in the future")

    draft = replace(draft, scheduled_at=scheduled_at)
    notification = Notification.from_draft(
        draft, status=NotificationStatus.SCHEDULED, created_at=current_time
    )
    saved = store.save(notification)
    logger.info(
        "Scheduled notification %s for %s", saved.notification_id, scheduled_at.isoformat()
    )
    return saved


__all__ = ["create_notification", "schedule_notification"]
