"""Aggregate application use cases."""

from .notifications import (
    create_notification,
    schedule_notification,
    send_email_notification,
    send_sms_notification,
)

__all__ = [
    "create_notification",
    "schedule_notification",
    "send_email_notification",
    "send_sms_notification",
]
