"""Shared fixtures for the notification service tests."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

import pytest

# Ensure the project root (which contains the ``app`` package) is importable
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)
os.environ.pop("APP_TIMEZONE", None)

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.domain.entities import NotificationDraft, NotificationPriority, NotificationType
from app.domain.ports import DeliveryResult, TransactionCheckResult, VerificationResult
from app.infrastructure.database import Base, initialize_database
from app.infrastructure.repositories import NotificationRepository


@dataclass
class RecordingEmailGateway:
    """Email gateway stub that records calls and answers with ``result``."""

    result: DeliveryResult = field(default_factory=DeliveryResult.ok)
    error: Exception | None = None
    sent: list[tuple[str, str, str]] = field(default_factory=list)

    def send_email(self, address: str, subject: str, body: str) -> DeliveryResult:
        self.sent.append((address, subject, body))
        if self.error is not None:
            raise self.error
        return self.result


@dataclass
class RecordingSmsGateway:
    result: DeliveryResult = field(default_factory=DeliveryResult.ok)
    error: Exception | None = None
    sent: list[tuple[str, str]] = field(default_factory=list)

    def send_sms(self, number: str, body: str) -> DeliveryResult:
        self.sent.append((number, body))
        if self.error is not None:
            raise self.error
        return self.result


@dataclass
class StubTransactionVerifier:
    exists: bool = True
    fees: TransactionCheckResult = field(
        default_factory=lambda: TransactionCheckResult(success=True, text="$5.00")
    )
    fraud: TransactionCheckResult = field(
        default_factory=lambda: TransactionCheckResult(success=True, text="Fraud score: 0.15")
    )
    error: Exception | None = None
    calls: list[tuple[str, str]] = field(default_factory=list)
    service_name: str = "transaction"

    def _record(self, operation: str, transaction_id: str) -> None:
        self.calls.append((operation, transaction_id))
        if self.error is not None:
            raise self.error

    def verify_transaction(self, transaction_id: str) -> VerificationResult:
        self._record("verify", transaction_id)
        return VerificationResult(exists=self.exists, raw={"transactionId": transaction_id})

    def calculate_fees(self, transaction_id: str) -> TransactionCheckResult:
        self._record("fees", transaction_id)
        return self.fees

    def check_fraud(self, transaction_id: str) -> TransactionCheckResult:
        self._record("fraud", transaction_id)
        return self.fraud


@dataclass
class StubAccountVerifier:
    exists: bool = True
    error: Exception | None = None
    calls: list[str] = field(default_factory=list)
    service_name: str = "account"

    def verify_account(self, account_number: str) -> VerificationResult:
        self.calls.append(account_number)
        if self.error is not None:
            raise self.error
        return VerificationResult(exists=self.exists, raw={"accountNumber": account_number})


@pytest.fixture()
def engine():
    """In-memory SQLite engine shared across threads for one test."""

    test_engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(bind=test_engine)
    yield test_engine
    Base.metadata.drop_all(bind=test_engine)
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def store(session) -> NotificationRepository:
    return NotificationRepository(session)


@pytest.fixture()
def email_gateway() -> RecordingEmailGateway:
    return RecordingEmailGateway()


@pytest.fixture()
def sms_gateway() -> RecordingSmsGateway:
    return RecordingSmsGateway()


@pytest.fixture()
def transaction_verifier() -> StubTransactionVerifier:
    return StubTransactionVerifier()


@pytest.fixture()
def account_verifier() -> StubAccountVerifier:
    return StubAccountVerifier()


@pytest.fixture()
def now() -> datetime:
    return datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def make_draft():
    """Return a factory producing notification drafts with sensible defaults."""

    def _make(**overrides) -> NotificationDraft:
        values = {
            "recipient_id": 123,
            "notification_type": NotificationType.EMAIL,
            "message": "Test Message",
            "subject": "Test Subject",
            "recipient_email": "test@example.com",
            "recipient_phone": "+40721234567",
            "priority": NotificationPriority.HIGH,
            "trigger_event": "ACCOUNT_CREATED",
        }
        values.update(overrides)
        return NotificationDraft(**values)

    return _make
