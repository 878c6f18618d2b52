"""Capabilities the notification lifecycle engine depends on.

Implementations live in ``app.infrastructure``; tests substitute stubs that
satisfy the same protocols.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from app.domain.entities.notification import Notification


@dataclass(frozen=True)
class VerificationResult:
    """Outcome of an upstream existence check."""

    exists: bool
    raw: Any = None


@dataclass(frozen=True)
class TransactionCheckResult:
    """Outcome of a fee calculation or anti-fraud check."""

    success: bool
    text: str = ""


@dataclass(frozen=True)
class DeliveryResult:
    """Outcome reported by a delivery gateway."""

    success: bool
    error_detail: str | None = None

    @classmethod
    def ok(cls) -> "DeliveryResult":
        return cls(success=True)

    @classmethod
    def failed(cls, detail: str) -> "DeliveryResult":
        return cls(success=False, error_detail=detail)


class NotificationStore(Protocol):
    """Durable keyed storage for notification records."""

    def save(self, notification: Notification) -> Notification:
        ...

    def find_by_id(self, notification_id: str) -> Notification | None:
        ...

    def find_by_id_for_update(self, notification_id: str) -> Notification | None:
        """Return the record while holding a per-record write lock."""
        ...

    def find_by_recipient(self, recipient_id: int) -> Sequence[Notification]:
        """Return the recipient's records ordered newest first."""
        ...

    def find_created_before(self, cutoff: datetime) -> Sequence[Notification]:
        ...

    def delete_created_before(self, cutoff: datetime) -> int:
        ...


class EmailGateway(Protocol):
    def send_email(self, address: str, subject: str, body: str) -> DeliveryResult:
        ...


class SmsGateway(Protocol):
    def send_sms(self, number: str, body: str) -> DeliveryResult:
        ...


class TransactionVerifier(Protocol):
    """Read-only view of the transaction service."""

    service_name: str

    def verify_transaction(self, transaction_id: str) -> VerificationResult:
        ...

    def calculate_fees(self, transaction_id: str) -> TransactionCheckResult:
        ...

    def check_fraud(self, transaction_id: str) -> TransactionCheckResult:
        ...


class AccountVerifier(Protocol):
    """Read-only view of the account management service."""

    service_name: str

    def verify_account(self, account_number: str) -> VerificationResult:
        ...


__all__ = [
    "AccountVerifier",
    "DeliveryResult",
    "EmailGateway",
    "NotificationStore",
    "SmsGateway",
    "TransactionCheckResult",
    "TransactionVerifier",
    "VerificationResult",
]
