"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Column, DateTime, Enum, Integer, String, Text

from app.domain.entities import (
    DEFAULT_MAX_RETRIES,
    NotificationPriority,
    NotificationStatus,
    NotificationType,
)
from app.infrastructure.database import Base
from app.utils import now_in_app_naive_datetime


def _enum_column(enum_cls, name: str) -> Enum:
    # Persist the verbatim member values (PENDING, EMAIL, ...) as plain strings.
    return Enum(
        enum_cls,
        name=name,
        native_enum=False,
        length=20,
        values_callable=lambda members: [member.value for member in members],
    )


class NotificationModel(Base):
    """Database representation for customer notifications."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(String(64), nullable=False, unique=True, index=True)
    recipient_id = Column(Integer, nullable=False, index=True)
    recipient_email = Column(String(255), nullable=True)
    recipient_phone = Column(String(32), nullable=True)
    notification_type = Column(
        _enum_column(NotificationType, "notification_type"), nullable=False
    )
    priority = Column(
        _enum_column(NotificationPriority, "notification_priority"),
        nullable=False,
        default=NotificationPriority.MEDIUM,
    )
    trigger_event = Column(String(100), nullable=True)
    subject = Column(String(255), nullable=True)
    message = Column(Text, nullable=False)
    status = Column(
        _enum_column(NotificationStatus, "notification_status"),
        nullable=False,
        default=NotificationStatus.PENDING,
        index=True,
    )
    scheduled_at = Column(DateTime(), nullable=True)
    retry_count = Column(Integer, nullable=False, default=0)
    max_retries = Column(Integer, nullable=False, default=DEFAULT_MAX_RETRIES)
    failure_reason = Column(Text, nullable=True)
    failed_at = Column(DateTime(), nullable=True)
    created_at = Column(
        DateTime(), nullable=False, default=now_in_app_naive_datetime, index=True
    )
    sent_at = Column(DateTime(), nullable=True)
    delivered_at = Column(DateTime(), nullable=True)
    version = Column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}


__all__ = ["NotificationModel"]
