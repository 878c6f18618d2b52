"""Timestamp helpers bound to the configured application timezone.

Notification timestamps are stored naive, expressed in ``APP_TIMEZONE``, and
handed to the domain as aware datetimes.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone, tzinfo
from functools import lru_cache

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from app.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_app_timezone() -> tzinfo:
    """Return the ``APP_TIMEZONE`` zone, or UTC when unset or unknown."""

    tz_name = (get_settings().app_timezone or "").strip()
    if not tz_name:
        return timezone.utc
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("Unknown APP_TIMEZONE %r; using UTC", tz_name)
        return timezone.utc


def now_in_app_timezone() -> datetime:
    return datetime.now(tz=get_app_timezone())


def now_in_app_naive_datetime() -> datetime:
    """Column default for ``created_at``."""

    return now_in_app_timezone().replace(tzinfo=None)


def ensure_app_timezone(value: datetime | None) -> datetime | None:
    """Express ``value`` in the application timezone.

    Naive values are read as already local to that timezone, which is how
    the store keeps them.
    """

    if value is None:
        return None
    tz = get_app_timezone()
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def ensure_app_naive_datetime(value: datetime | None) -> datetime | None:
    localized = ensure_app_timezone(value)
    return localized.replace(tzinfo=None) if localized is not None else None


def retention_cutoff(retention_days: int, *, now: datetime | None = None) -> datetime:
    """Return the instant ``retention_days`` before ``now``."""

    reference = ensure_app_timezone(now) or now_in_app_timezone()
    return reference - timedelta(days=retention_days)
