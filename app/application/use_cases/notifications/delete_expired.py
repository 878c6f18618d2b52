"""Use case for purging notifications older than the retention window."""

from __future__ import annotations

import logging
from datetime import datetime

from app.domain.exceptions import NotificationValidationError
from app.domain.ports import NotificationStore
from app.utils import retention_cutoff

from .results import ExpiryResult

logger = logging.getLogger(__name__)


def delete_expired_notifications(
    store: NotificationStore,
    retention_days: int,
    *,
    now: datetime | None = None,
) -> ExpiryResult:
    """Delete every notification created before ``now - retention_days``.

    Records are selected by age only, whatever their status.
    """

    if retention_days < 0:
        raise NotificationValidationError("Retention days must not be negative")

    cutoff = retention_cutoff(retention_days, now=now)
    expired = store.find_created_before(cutoff)
    if not expired:
        return ExpiryResult(
            deleted=False,
            deleted_count=0,
            cutoff=cutoff,
            message="No expired notifications found",
        )

    deleted_count = store.delete_created_before(cutoff)
    logger.info(
        "Deleted %s notifications created before %s", deleted_count, cutoff.isoformat()
    )
    return ExpiryResult(
        deleted=True,
        deleted_count=deleted_count,
        cutoff=cutoff,
        message="Expired notifications deleted successfully",
    )


__all__ = ["delete_expired_notifications"]
