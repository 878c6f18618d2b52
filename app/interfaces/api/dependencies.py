"""FastAPI dependency utilities.

Each factory builds one collaborator of the lifecycle engine; tests replace
them through ``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from app.domain.ports import (
    AccountVerifier,
    EmailGateway,
    NotificationStore,
    SmsGateway,
    TransactionVerifier,
)
from app.infrastructure.clients import AccountServiceClient, TransactionServiceClient
from app.infrastructure.database import get_db
from app.infrastructure.email import SendGridEmailGateway
from app.infrastructure.repositories import NotificationRepository
from app.infrastructure.sms import HttpSmsGateway


def get_notification_store(db: Session = Depends(get_db)) -> NotificationStore:
    """Return the notification store bound to the request session."""

    return NotificationRepository(db)


def get_email_gateway() -> EmailGateway:
    return SendGridEmailGateway()


def get_sms_gateway() -> SmsGateway:
    return HttpSmsGateway()


def get_transaction_verifier() -> TransactionVerifier:
    return TransactionServiceClient()


def get_account_verifier() -> AccountVerifier:
    return AccountServiceClient()


__all__ = [
    "get_account_verifier",
    "get_email_gateway",
    "get_notification_store",
    "get_sms_gateway",
    "get_transaction_verifier",
]
