"""Tests for the SQLAlchemy notification store."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import text

from app.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationStatus,
    NotificationType,
    generate_notification_id,
)
from app.domain.exceptions import ConcurrentUpdateError
from app.infrastructure.repositories import NotificationRepository

BASE_TIME = datetime(2025, 3, 1, 9, 30, tzinfo=timezone.utc)


def _notification(**overrides) -> Notification:
    values = {
        "id": None,
        "notification_id": generate_notification_id(),
        "recipient_id": 7,
        "notification_type": NotificationType.SMS,
        "message": "Balance below threshold",
        "status": NotificationStatus.PENDING,
        "recipient_phone": "+40721234567",
        "priority": NotificationPriority.LOW,
        "trigger_event": "LOW_BALANCE",
        "created_at": BASE_TIME,
    }
    values.update(overrides)
    return Notification(**values)


def test_save_and_find_round_trip(store: NotificationRepository):
    saved = store.save(_notification())

    found = store.find_by_id(saved.notification_id)

    assert saved.id is not None
    assert found == saved
    assert found.notification_type is NotificationType.SMS
    assert found.priority is NotificationPriority.LOW
    assert found.created_at == BASE_TIME


def test_enum_values_are_stored_verbatim(store: NotificationRepository, session):
    saved = store.save(_notification(status=NotificationStatus.SCHEDULED))

    row = session.execute(
        text(
            "SELECT status, notification_type, priority FROM notification "
            "WHERE notification_id = :notification_id"
        ),
        {"notification_id": saved.notification_id},
    ).one()

    assert tuple(row) == ("SCHEDULED", "SMS", "LOW")


def test_save_updates_existing_record(store: NotificationRepository):
    saved = store.save(_notification())
    saved.mark_failed("SMS sending failed: timeout", BASE_TIME + timedelta(minutes=1))

    store.save(saved)
    reloaded = store.find_by_id_for_update(saved.notification_id)

    assert reloaded.status is NotificationStatus.FAILED
    assert reloaded.failure_reason == "SMS sending failed: timeout"
    assert reloaded.failed_at == BASE_TIME + timedelta(minutes=1)


def test_find_by_id_missing_returns_none(store: NotificationRepository):
    assert store.find_by_id("NOTIF-NOPE") is None
    assert store.find_by_id_for_update("NOTIF-NOPE") is None


def test_duplicate_notification_id_is_rejected(store: NotificationRepository):
    from sqlalchemy.exc import IntegrityError

    first = store.save(_notification())

    with pytest.raises(IntegrityError):
        store.save(_notification(notification_id=first.notification_id))


def test_created_before_queries_and_batch_delete(store: NotificationRepository):
    old = store.save(_notification(created_at=BASE_TIME - timedelta(days=45)))
    older = store.save(_notification(created_at=BASE_TIME - timedelta(days=60)))
    fresh = store.save(_notification(created_at=BASE_TIME - timedelta(days=1)))
    cutoff = BASE_TIME - timedelta(days=30)

    expired = store.find_created_before(cutoff)

    assert [item.notification_id for item in expired] == [
        older.notification_id,
        old.notification_id,
    ]
    assert store.delete_created_before(cutoff) == 2
    assert store.find_created_before(cutoff) == []
    assert store.find_by_id(fresh.notification_id) is not None


def test_save_from_stale_read_is_rejected(store: NotificationRepository):
    saved = store.save(_notification())
    first = store.find_by_id(saved.notification_id)
    second = store.find_by_id(saved.notification_id)

    second.mark_failed("SMS sending failed: timeout", BASE_TIME)
    updated = store.save(second)
    first.mark_sent(BASE_TIME)

    with pytest.raises(ConcurrentUpdateError):
        store.save(first)

    reloaded = store.find_by_id(saved.notification_id)
    assert updated.version == saved.version + 1
    assert reloaded.status is NotificationStatus.FAILED
    assert reloaded.version == updated.version
