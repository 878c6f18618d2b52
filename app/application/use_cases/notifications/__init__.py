"""Notification lifecycle use cases."""

from .create_notification import create_notification, schedule_notification
from .delete_expired import delete_expired_notifications
from .deliver_notification import send_email_notification, send_sms_notification
from .mark_as_read import mark_as_read
from .orchestration import (
    calculate_fees_and_notify,
    check_fraud_and_notify,
    create_notification_for_account,
    create_notification_for_transaction,
)
from .queries import (
    fetch_notification,
    get_notification_history,
    get_notification_status,
)
from .resend_notification import resend_failed_notification
from .results import (
    DeliveryReceipt,
    ExpiryResult,
    MarkReadResult,
    NotifyResult,
    ResendResult,
)
from .update_settings import update_notification_settings

__all__ = [
    "DeliveryReceipt",
    "ExpiryResult",
    "MarkReadResult",
    "NotifyResult",
    "ResendResult",
    "calculate_fees_and_notify",
    "check_fraud_and_notify",
    "create_notification",
    "create_notification_for_account",
    "create_notification_for_transaction",
    "delete_expired_notifications",
    "fetch_notification",
    "get_notification_history",
    "get_notification_status",
    "mark_as_read",
    "resend_failed_notification",
    "schedule_notification",
    "send_email_notification",
    "send_sms_notification",
    "update_notification_settings",
]
