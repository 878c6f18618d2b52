"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.domain.entities import Notification
from app.domain.exceptions import ConcurrentUpdateError
from app.infrastructure.models import NotificationModel
from app.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Provide the notification store operations on top of SQLAlchemy.

    Every write commits immediately, so a use case that loads a record,
    mutates it and calls :meth:`save` persists the whole change at once.
    Updates are guarded by the ``version`` column: a write based on a stale
    read raises :class:`ConcurrentUpdateError` instead of overwriting the
    concurrent change.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, notification: Notification) -> Notification:
        if notification.id is None:
            return self._create(notification)
        return self._update(notification)

    def find_by_id(self, notification_id: str) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.notification_id == notification_id)
            .one_or_none()
        )
        return self._to_entity(model) if model is not None else None

    def find_by_id_for_update(self, notification_id: str) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.notification_id == notification_id)
            .with_for_update()
            .one_or_none()
        )
        return self._to_entity(model) if model is not None else None

    def find_by_recipient(self, recipient_id: int) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.recipient_id == recipient_id)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def find_created_before(self, cutoff: datetime) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.created_at < ensure_app_naive_datetime(cutoff))
            .order_by(NotificationModel.created_at.asc(), NotificationModel.id.asc())
        )
        return [self._to_entity(model) for model in query.all()]

    def delete_created_before(self, cutoff: datetime) -> int:
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.created_at < ensure_app_naive_datetime(cutoff))
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return int(deleted or 0)

    def _create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification, include_creation_fields=True)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def _update(self, notification: Notification) -> Notification:
        model = self.session.get(NotificationModel, notification.id)
        if model is None:
            msg = f"Notification with id {notification.notification_id} not found"
            raise ValueError(msg)
        if notification.version is not None and model.version != notification.version:
            self.session.rollback()
            raise self._conflict(notification)
        self._apply_entity_to_model(model, notification, include_creation_fields=False)
        self.session.add(model)
        try:
            self.session.commit()
        except StaleDataError as exc:
            self.session.rollback()
            raise self._conflict(notification) from exc
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _conflict(notification: Notification) -> ConcurrentUpdateError:
        logger.warning(
            "Notification %s changed concurrently; discarding stale write",
            notification.notification_id,
        )
        return ConcurrentUpdateError(
            "Notification was modified by another operation",
            identifier=notification.notification_id,
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel,
        notification: Notification,
        *,
        include_creation_fields: bool,
    ) -> None:
        if include_creation_fields:
            # notification_id, recipient_id and created_at never change afterwards.
            model.notification_id = notification.notification_id
            model.recipient_id = notification.recipient_id
            model.notification_type = notification.notification_type
            model.created_at = (
                ensure_app_naive_datetime(notification.created_at)
                or ensure_app_naive_datetime(now_in_app_timezone())
            )
        model.recipient_email = notification.recipient_email
        model.recipient_phone = notification.recipient_phone
        model.priority = notification.priority
        model.trigger_event = notification.trigger_event
        model.subject = notification.subject
        model.message = notification.message
        model.status = notification.status
        model.scheduled_at = ensure_app_naive_datetime(notification.scheduled_at)
        model.retry_count = notification.retry_count
        model.max_retries = notification.max_retries
        model.failure_reason = notification.failure_reason
        model.failed_at = ensure_app_naive_datetime(notification.failed_at)
        model.sent_at = ensure_app_naive_datetime(notification.sent_at)
        model.delivered_at = ensure_app_naive_datetime(notification.delivered_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            notification_id=model.notification_id,
            recipient_id=model.recipient_id,
            notification_type=model.notification_type,
            message=model.message,
            status=model.status,
            subject=model.subject,
            recipient_email=model.recipient_email,
            recipient_phone=model.recipient_phone,
            priority=model.priority,
            trigger_event=model.trigger_event,
            scheduled_at=ensure_app_timezone(model.scheduled_at),
            retry_count=model.retry_count or 0,
            max_retries=model.max_retries,
            failure_reason=model.failure_reason,
            failed_at=ensure_app_timezone(model.failed_at),
            created_at=ensure_app_timezone(model.created_at),
            sent_at=ensure_app_timezone(model.sent_at),
            delivered_at=ensure_app_timezone(model.delivered_at),
            version=model.version,
        )


__all__ = ["NotificationRepository"]
