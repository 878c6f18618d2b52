"""Use cases for delivering notifications through their channel."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from app.domain.entities import Notification, NotificationType
from app.domain.exceptions import (
    DeliveryError,
    MissingContactError,
    NotificationTypeMismatchError,
)
from app.domain.ports import DeliveryResult, EmailGateway, NotificationStore, SmsGateway
from app.domain.state_machine import LifecycleEvent, ensure_sendable, ensure_transition
from app.utils import ensure_app_timezone, now_in_app_timezone

from .lookup import get_notification_or_raise
from .results import DeliveryReceipt

logger = logging.getLogger(__name__)

_CHANNEL_LABELS = {
    NotificationType.EMAIL: "Email",
    NotificationType.SMS: "SMS",
}
_MISSING_CONTACT_MESSAGES = {
    NotificationType.EMAIL: "Recipient email is missing",
    NotificationType.SMS: "Recipient phone number is missing",
}


def send_email_notification(
    store: NotificationStore,
    email_gateway: EmailGateway,
    notification_id: str,
    *,
    now: datetime | None = None,
) -> DeliveryReceipt:
    """Deliver an EMAIL notification and record the outcome."""

    return _deliver(
        store,
        notification_id,
        NotificationType.EMAIL,
        lambda notification, address: email_gateway.send_email(
            address, notification.subject or "", notification.message
        ),
        now=now,
    )


def send_sms_notification(
    store: NotificationStore,
    sms_gateway: SmsGateway,
    notification_id: str,
    *,
    now: datetime | None = None,
) -> DeliveryReceipt:
    """Deliver an SMS notification and record the outcome."""

    return _deliver(
        store,
        notification_id,
        NotificationType.SMS,
        lambda notification, number: sms_gateway.send_sms(number, notification.message),
        now=now,
    )


def ensure_deliverable(notification: Notification, channel: NotificationType) -> str:
    """Validate ``notification`` for ``channel`` and return the contact address.

    Validation failures are caller errors: they are raised before the
    gateway is involved and leave the record untouched.
    """

    if notification.notification_type is not channel:
        raise NotificationTypeMismatchError(f"Notification is not of type {channel.value}")

    contact = (notification.contact_for(channel) or "").strip()
    if not contact:
        raise MissingContactError(_MISSING_CONTACT_MESSAGES[channel])

    ensure_sendable(notification.status)
    return contact


def _deliver(
    store: NotificationStore,
    notification_id: str,
    channel: NotificationType,
    send: Callable[[Notification, str], DeliveryResult],
    *,
    now: datetime | None,
) -> DeliveryReceipt:
    notification = get_notification_or_raise(store, notification_id, for_update=True)
    contact = ensure_deliverable(notification, channel)
    label = _CHANNEL_LABELS[channel]

    logger.info("Sending %s notification %s to %s", label, notification_id, contact)
    try:
        result = send(notification, contact)
    except Exception as exc:  # gateway errors become a recorded FAILED state
        logger.exception("%s gateway raised while sending %s", label, notification_id)
        result = DeliveryResult.failed(str(exc) or exc.__class__.__name__)

    timestamp = ensure_app_timezone(now) or now_in_app_timezone()
    if result.success:
        ensure_transition(notification.status, LifecycleEvent.SEND_SUCCEEDED)
        notification.mark_sent(timestamp)
        saved = store.save(notification)
        return DeliveryReceipt(
            notification=saved, message=f"{label} sent successfully to {contact}"
        )

    detail = result.error_detail or "unknown error"
    ensure_transition(notification.status, LifecycleEvent.SEND_FAILED)
    notification.mark_failed(f"{label} sending failed: {detail}", timestamp)
    store.save(notification)
    logger.warning("%s notification %s failed: %s", label, notification_id, detail)
    raise DeliveryError(f"Failed to send {label}: {detail}", service=channel.value.lower())


__all__ = [
    "ensure_deliverable",
    "send_email_notification",
    "send_sms_notification",
]
