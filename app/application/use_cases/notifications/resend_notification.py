"""Use case for putting a failed notification back in the delivery queue."""

from __future__ import annotations

import logging

from app.domain.exceptions import RetryLimitExceededError
from app.domain.ports import NotificationStore
from app.domain.state_machine import LifecycleEvent, ensure_transition

from .lookup import get_notification_or_raise
from .results import ResendResult

logger = logging.getLogger(__name__)


def resend_failed_notification(store: NotificationStore, notification_id: str) -> ResendResult:
    """Move a FAILED notification back to PENDING.

    ``retry_count`` counts these resends, not delivery attempts, and a
    notification may be resent exactly ``max_retries`` times.
    """

    notification = get_notification_or_raise(store, notification_id, for_update=True)
    ensure_transition(notification.status, LifecycleEvent.RESEND)

    if notification.retry_count >= notification.max_retries:
        logger.warning(
            "Notification %s reached the retry limit (%s)",
            notification_id,
            notification.max_retries,
        )
        raise RetryLimitExceededError("Maximum retry attempts reached")

    notification.reset_for_retry()
    saved = store.save(notification)
    logger.info("Notification %s queued again, retry %s", notification_id, saved.retry_count)
    return ResendResult(
        notification=saved,
        retry_count=saved.retry_count,
        message=f"Notification resent successfully. Retry count: {saved.retry_count}",
    )


__all__ = ["resend_failed_notification"]
