"""Value objects returned by notification use cases."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from app.domain.entities import Notification


@dataclass(frozen=True)
class DeliveryReceipt:
    notification: Notification
    message: str


@dataclass(frozen=True)
class ResendResult:
    notification: Notification
    retry_count: int
    message: str


@dataclass(frozen=True)
class MarkReadResult:
    """``changed`` is ``False`` when the notification was already read."""

    notification: Notification
    changed: bool
    message: str


@dataclass(frozen=True)
class ExpiryResult:
    deleted: bool
    deleted_count: int
    cutoff: datetime
    message: str


@dataclass(frozen=True)
class NotifyResult:
    """Outcome of an upstream check followed by an email notification."""

    notification: Notification
    detail: str
    message: str


__all__ = [
    "DeliveryReceipt",
    "ExpiryResult",
    "MarkReadResult",
    "NotifyResult",
    "ResendResult",
]
