"""Tests for the use cases that consult the transaction and account services."""

from __future__ import annotations

import pytest

from app.application.use_cases.notifications import (
    calculate_fees_and_notify,
    check_fraud_and_notify,
    create_notification_for_account,
    create_notification_for_transaction,
    fetch_notification,
)
from app.domain.entities import NotificationStatus, NotificationType
from app.domain.exceptions import (
    DeliveryError,
    FeeCalculationError,
    FraudCheckError,
    MissingContactError,
    NotificationNotFoundError,
    UpstreamServiceError,
)
from app.domain.ports import DeliveryResult, TransactionCheckResult


def test_create_for_transaction_prefixes_message(store, transaction_verifier, make_draft, now):
    notification = create_notification_for_transaction(
        store, transaction_verifier, "TXN-001", make_draft(message="Transaction completed"), now=now
    )

    assert notification.status is NotificationStatus.PENDING
    assert notification.message == "Notification for transaction: TXN-001 - Transaction completed"
    assert transaction_verifier.calls == [("verify", "TXN-001")]


def test_create_for_missing_transaction_creates_nothing(
    store, transaction_verifier, make_draft, now
):
    transaction_verifier.exists = False

    with pytest.raises(NotificationNotFoundError, match="Transaction not found: TXN-404"):
        create_notification_for_transaction(
            store, transaction_verifier, "TXN-404", make_draft(), now=now
        )

    assert store.find_by_recipient(123) == []


def test_create_for_transaction_wraps_unexpected_errors(
    store, transaction_verifier, make_draft, now
):
    transaction_verifier.error = TimeoutError("read timed out")

    with pytest.raises(UpstreamServiceError) as exc_info:
        create_notification_for_transaction(
            store, transaction_verifier, "TXN-001", make_draft(), now=now
        )

    assert exc_info.value.service == "transaction"
    assert "read timed out" in str(exc_info.value)
    assert store.find_by_recipient(123) == []


def test_create_for_transaction_propagates_upstream_errors(
    store, transaction_verifier, make_draft, now
):
    upstream = UpstreamServiceError("status 503", service="transaction")
    transaction_verifier.error = upstream

    with pytest.raises(UpstreamServiceError) as exc_info:
        create_notification_for_transaction(
            store, transaction_verifier, "TXN-001", make_draft(), now=now
        )

    assert exc_info.value is upstream


def test_create_for_account_prefixes_message(store, account_verifier, make_draft, now):
    notification = create_notification_for_account(
        store, account_verifier, "RO49AAAA1B31007593840000", make_draft(message="Welcome"), now=now
    )

    assert notification.message == "Notification for account: RO49AAAA1B31007593840000 - Welcome"
    assert notification.status is NotificationStatus.PENDING


def test_create_for_unknown_account(store, account_verifier, make_draft, now):
    account_verifier.exists = False

    with pytest.raises(NotificationNotFoundError, match="Account verification failed"):
        create_notification_for_account(store, account_verifier, "ACC-1", make_draft(), now=now)

    assert store.find_by_recipient(123) == []


def test_create_for_account_service_down(store, account_verifier, make_draft, now):
    account_verifier.error = ConnectionError("connection refused")

    with pytest.raises(UpstreamServiceError) as exc_info:
        create_notification_for_account(store, account_verifier, "ACC-1", make_draft(), now=now)

    assert exc_info.value.service == "account"
    assert store.find_by_recipient(123) == []


def test_calculate_fees_creates_and_sends_email(
    store, transaction_verifier, email_gateway, make_draft, now
):
    result = calculate_fees_and_notify(
        store,
        transaction_verifier,
        email_gateway,
        "TXN-001",
        make_draft(notification_type=NotificationType.SMS),
        now=now,
    )

    assert result.message == "Fees calculated and notification sent: $5.00"
    assert result.detail == "$5.00"
    stored = fetch_notification(store, result.notification.notification_id)
    assert stored.status is NotificationStatus.SENT
    assert stored.notification_type is NotificationType.EMAIL
    assert stored.subject == "Transaction Fees Notification"
    assert stored.message == "Transaction fees: $5.00"
    assert email_gateway.sent == [
        ("test@example.com", "Transaction Fees Notification", "Transaction fees: $5.00")
    ]


def test_calculate_fees_failure_creates_nothing(
    store, transaction_verifier, email_gateway, make_draft, now
):
    transaction_verifier.fees = TransactionCheckResult(success=False)

    with pytest.raises(FeeCalculationError, match="Failed to calculate fees") as exc_info:
        calculate_fees_and_notify(
            store, transaction_verifier, email_gateway, "TXN-001", make_draft(), now=now
        )

    assert exc_info.value.service == "transaction"
    assert store.find_by_recipient(123) == []
    assert email_gateway.sent == []


def test_calculate_fees_requires_email_before_calling_upstream(
    store, transaction_verifier, email_gateway, make_draft, now
):
    with pytest.raises(MissingContactError):
        calculate_fees_and_notify(
            store,
            transaction_verifier,
            email_gateway,
            "TXN-001",
            make_draft(recipient_email=None),
            now=now,
        )

    assert transaction_verifier.calls == []
    assert store.find_by_recipient(123) == []


def test_check_fraud_sends_security_alert(
    store, transaction_verifier, email_gateway, make_draft, now
):
    result = check_fraud_and_notify(
        store, transaction_verifier, email_gateway, "TXN-777", make_draft(), now=now
    )

    assert result.message == "Fraud check completed and notification sent: Fraud score: 0.15"
    stored = fetch_notification(store, result.notification.notification_id)
    assert stored.subject == "Security Alert - Transaction TXN-777"
    assert stored.message == "Anti-fraud check result: Fraud score: 0.15"
    assert stored.status is NotificationStatus.SENT
    assert transaction_verifier.calls == [("fraud", "TXN-777")]


def test_check_fraud_failure(store, transaction_verifier, email_gateway, make_draft, now):
    transaction_verifier.fraud = TransactionCheckResult(success=False)

    with pytest.raises(FraudCheckError, match="Fraud check failed for transaction: TXN-777"):
        check_fraud_and_notify(
            store, transaction_verifier, email_gateway, "TXN-777", make_draft(), now=now
        )

    assert store.find_by_recipient(123) == []


def test_check_fraud_email_failure_leaves_failed_record(
    store, transaction_verifier, email_gateway, make_draft, now
):
    email_gateway.result = DeliveryResult.failed("rejected")

    with pytest.raises(DeliveryError):
        check_fraud_and_notify(
            store, transaction_verifier, email_gateway, "TXN-777", make_draft(), now=now
        )

    [stored] = store.find_by_recipient(123)
    assert stored.status is NotificationStatus.FAILED
    assert stored.failure_reason == "Email sending failed: rejected"


def test_upstream_errors_carry_the_verifier_service_name(
    store, transaction_verifier, email_gateway, make_draft, now
):
    transaction_verifier.service_name = "ledger"
    transaction_verifier.error = ConnectionError("connection reset")

    with pytest.raises(UpstreamServiceError) as exc_info:
        calculate_fees_and_notify(
            store, transaction_verifier, email_gateway, "TXN-001", make_draft(), now=now
        )

    assert exc_info.value.service == "ledger"
    assert "ledger service" in str(exc_info.value)
