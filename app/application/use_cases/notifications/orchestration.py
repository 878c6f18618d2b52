"""Use cases that consult an upstream service before notifying a customer.

Verifier calls happen before anything is written, so a failed check leaves
no record behind. Once the fee or fraud e-mail is created, a gateway failure
is recorded on it as FAILED like any other delivery.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime
from typing import TypeVar

from app.domain.entities import Notification, NotificationDraft, NotificationType
from app.domain.exceptions import (
    FeeCalculationError,
    FraudCheckError,
    MissingContactError,
    NotificationNotFoundError,
    UpstreamServiceError,
)
from app.domain.ports import (
    AccountVerifier,
    EmailGateway,
    NotificationStore,
    TransactionVerifier,
)

from .create_notification import create_notification
from .deliver_notification import send_email_notification
from .results import NotifyResult

logger = logging.getLogger(__name__)

FEES_SUBJECT = "Transaction Fees Notification"

T = TypeVar("T")


def create_notification_for_transaction(
    store: NotificationStore,
    transaction_verifier: TransactionVerifier,
    transaction_id: str,
    draft: NotificationDraft,
    *,
    now: datetime | None = None,
) -> Notification:
    """Create a PENDING notification about an existing transaction."""

    verification = _call_upstream(
        transaction_verifier.service_name,
        transaction_verifier.verify_transaction,
        transaction_id,
    )
    if not verification.exists:
        logger.warning("Transaction %s not found; notification not created", transaction_id)
        raise NotificationNotFoundError(
            f"Transaction not found: {transaction_id}", identifier=transaction_id
        )

    logger.info("Transaction %s verified", transaction_id)
    contextual = replace(
        draft, message=f"Notification for transaction: {transaction_id} - {draft.message}"
    )
    return create_notification(store, contextual, now=now)


def create_notification_for_account(
    store: NotificationStore,
    account_verifier: AccountVerifier,
    account_number: str,
    draft: NotificationDraft,
    *,
    now: datetime | None = None,
) -> Notification:
    """Create a PENDING notification about an existing account."""

    verification = _call_upstream(
        account_verifier.service_name,
        account_verifier.verify_account,
        account_number,
    )
    if not verification.exists:
        logger.warning("Account %s not found; notification not created", account_number)
        raise NotificationNotFoundError(
            f"Account verification failed: {account_number}", identifier=account_number
        )

    logger.info("Account %s verified", account_number)
    contextual = replace(
        draft, message=f"Notification for account: {account_number} - {draft.message}"
    )
    return create_notification(store, contextual, now=now)


def calculate_fees_and_notify(
    store: NotificationStore,
    transaction_verifier: TransactionVerifier,
    email_gateway: EmailGateway,
    transaction_id: str,
    draft: NotificationDraft,
    *,
    now: datetime | None = None,
) -> NotifyResult:
    """Ask for the transaction fees and email them to the customer."""

    email_draft = _email_draft(draft)
    result = _call_upstream(
        transaction_verifier.service_name,
        transaction_verifier.calculate_fees,
        transaction_id,
    )
    if not result.success:
        logger.warning("Fee calculation failed for transaction %s", transaction_id)
        raise FeeCalculationError(
            f"Failed to calculate fees for transaction: {transaction_id}",
            service=transaction_verifier.service_name,
        )

    notification = create_notification(
        store,
        replace(email_draft, subject=FEES_SUBJECT, message=f"Transaction fees: {result.text}"),
        now=now,
    )
    receipt = send_email_notification(store, email_gateway, notification.notification_id, now=now)
    return NotifyResult(
        notification=receipt.notification,
        detail=result.text,
        message=f"Fees calculated and notification sent: {result.text}",
    )


def check_fraud_and_notify(
    store: NotificationStore,
    transaction_verifier: TransactionVerifier,
    email_gateway: EmailGateway,
    transaction_id: str,
    draft: NotificationDraft,
    *,
    now: datetime | None = None,
) -> NotifyResult:
    """Run the anti-fraud check and email a security alert with its result."""

    email_draft = _email_draft(draft)
    result = _call_upstream(
        transaction_verifier.service_name,
        transaction_verifier.check_fraud,
        transaction_id,
    )
    if not result.success:
        logger.warning("Fraud check failed for transaction %s", transaction_id)
        raise FraudCheckError(
            f"Fraud check failed for transaction: {transaction_id}",
            service=transaction_verifier.service_name,
        )

    notification = create_notification(
        store,
        replace(
            email_draft,
            subject=f"Security Alert - Transaction {transaction_id}",
            message=f"Anti-fraud check result: {result.text}",
        ),
        now=now,
    )
    receipt = send_email_notification(store, email_gateway, notification.notification_id, now=now)
    return NotifyResult(
        notification=receipt.notification,
        detail=result.text,
        message=f"Fraud check completed and notification sent: {result.text}",
    )


def _email_draft(draft: NotificationDraft) -> NotificationDraft:
    """Return ``draft`` as an EMAIL draft, rejecting it without an address."""

    if not (draft.recipient_email or "").strip():
        raise MissingContactError("Recipient email is missing")
    return replace(draft, notification_type=NotificationType.EMAIL)


def _call_upstream(service: str, call: Callable[[str], T], identifier: str) -> T:
    try:
        return call(identifier)
    except UpstreamServiceError:
        raise
    except Exception as exc:
        logger.exception("Unexpected error calling %s service", service)
        raise UpstreamServiceError(
            f"Error communicating with {service} service: {exc}", service=service
        ) from exc


__all__ = [
    "calculate_fees_and_notify",
    "check_fraud_and_notify",
    "create_notification_for_account",
    "create_notification_for_transaction",
]
