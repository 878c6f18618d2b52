"""Endpoints exposing the notification lifecycle."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.application.use_cases.notifications import (
    calculate_fees_and_notify as calculate_fees_and_notify_uc,
    check_fraud_and_notify as check_fraud_and_notify_uc,
    create_notification as create_notification_uc,
    create_notification_for_account as create_notification_for_account_uc,
    create_notification_for_transaction as create_notification_for_transaction_uc,
    delete_expired_notifications as delete_expired_notifications_uc,
    fetch_notification as fetch_notification_uc,
    get_notification_history as get_notification_history_uc,
    get_notification_status as get_notification_status_uc,
    mark_as_read as mark_as_read_uc,
    resend_failed_notification as resend_failed_notification_uc,
    schedule_notification as schedule_notification_uc,
    send_email_notification as send_email_notification_uc,
    send_sms_notification as send_sms_notification_uc,
    update_notification_settings as update_notification_settings_uc,
)
from app.config import get_settings
from app.domain.entities import Notification
from app.domain.exceptions import (
    ConcurrentUpdateError,
    InvalidStateTransitionError,
    NotificationError,
    NotificationNotFoundError,
    NotificationValidationError,
    RetryLimitExceededError,
    UpstreamServiceError,
)
from app.domain.ports import (
    AccountVerifier,
    EmailGateway,
    NotificationStore,
    SmsGateway,
    TransactionVerifier,
)
from app.interfaces.api.dependencies import (
    get_account_verifier,
    get_email_gateway,
    get_notification_store,
    get_sms_gateway,
    get_transaction_verifier,
)
from app.interfaces.api.schemas import (
    ExpiryResponse,
    MarkReadResponse,
    NotificationCreate,
    NotificationRead,
    NotificationStatusRead,
    NotificationUpdate,
    OperationResponse,
    ResendResponse,
)

router = APIRouter(prefix="/api/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _to_read_model(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


def _http_error(exc: NotificationError) -> HTTPException:
    """Translate a use case error into the matching HTTP response."""

    if isinstance(exc, NotificationNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, NotificationValidationError):
        code = status.HTTP_400_BAD_REQUEST
    elif isinstance(
        exc, (ConcurrentUpdateError, InvalidStateTransitionError, RetryLimitExceededError)
    ):
        code = status.HTTP_409_CONFLICT
    elif isinstance(exc, UpstreamServiceError):
        logger.warning("Upstream %s failure: %s", exc.service, exc)
        code = status.HTTP_502_BAD_GATEWAY
    else:
        code = status.HTTP_400_BAD_REQUEST
    return HTTPException(status_code=code, detail=str(exc))


@router.get("/test")
def health_check() -> dict[str, str]:
    """Return a static payload confirming the service is up."""

    return {"status": "ok", "service": "notifications"}


@router.post("/create", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: NotificationCreate,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Create a PENDING notification."""

    return _to_read_model(create_notification_uc(store, payload.to_draft()))


@router.post("/schedule", response_model=NotificationRead, status_code=status.HTTP_201_CREATED)
def schedule_notification(
    payload: NotificationCreate,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Create a notification to be delivered at ``scheduledAt``."""

    try:
        notification = schedule_notification_uc(store, payload.to_draft())
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return _to_read_model(notification)


@router.get("/get/{notification_id}", response_model=NotificationRead)
def fetch_notification(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    try:
        notification = fetch_notification_uc(store, notification_id)
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return _to_read_model(notification)


@router.put("/update", response_model=NotificationRead)
def update_notification_settings(
    payload: NotificationUpdate,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationRead:
    """Update the contact and content fields of a notification."""

    try:
        notification = update_notification_settings_uc(
            store,
            notification_id=payload.notification_id,
            recipient_email=payload.recipient_email,
            recipient_phone=payload.recipient_phone,
            message=payload.message,
            subject=payload.subject,
        )
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return _to_read_model(notification)


@router.delete("/delete-expired", response_model=ExpiryResponse)
def delete_expired_notifications(
    retention_days: int | None = Query(None, alias="retentionDays", ge=0),
    store: NotificationStore = Depends(get_notification_store),
) -> ExpiryResponse:
    """Purge notifications older than the retention window."""

    days = retention_days if retention_days is not None else get_settings().default_retention_days
    try:
        result = delete_expired_notifications_uc(store, days)
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return ExpiryResponse(
        message=result.message,
        deleted=result.deleted,
        deleted_count=result.deleted_count,
        cutoff=result.cutoff,
    )


@router.post("/resend-failed/{notification_id}", response_model=ResendResponse)
def resend_failed_notification(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> ResendResponse:
    try:
        result = resend_failed_notification_uc(store, notification_id)
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return ResendResponse(
        message=result.message,
        notification_id=notification_id,
        status=result.notification.status,
        retry_count=result.retry_count,
    )


@router.post("/send-sms/{notification_id}", response_model=OperationResponse)
def send_sms_notification(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
    sms_gateway: SmsGateway = Depends(get_sms_gateway),
) -> OperationResponse:
    try:
        receipt = send_sms_notification_uc(store, sms_gateway, notification_id)
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return OperationResponse(
        message=receipt.message,
        notification_id=notification_id,
        status=receipt.notification.status,
    )


@router.post("/send-email/{notification_id}", response_model=OperationResponse)
def send_email_notification(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
    email_gateway: EmailGateway = Depends(get_email_gateway),
) -> OperationResponse:
    try:
        receipt = send_email_notification_uc(store, email_gateway, notification_id)
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return OperationResponse(
        message=receipt.message,
        notification_id=notification_id,
        status=receipt.notification.status,
    )


@router.patch("/mark-read/{notification_id}", response_model=MarkReadResponse)
def mark_as_read(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> MarkReadResponse:
    try:
        result = mark_as_read_uc(store, notification_id)
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return MarkReadResponse(
        message=result.message,
        notification_id=notification_id,
        status=result.notification.status,
        changed=result.changed,
    )


@router.get("/status/{notification_id}", response_model=NotificationStatusRead)
def get_notification_status(
    notification_id: str,
    store: NotificationStore = Depends(get_notification_store),
) -> NotificationStatusRead:
    try:
        snapshot = get_notification_status_uc(store, notification_id)
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return NotificationStatusRead.model_validate(snapshot)


@router.get("/history/{recipient_id}", response_model=list[NotificationRead])
def get_notification_history(
    recipient_id: int,
    store: NotificationStore = Depends(get_notification_store),
) -> list[NotificationRead]:
    """Return every notification of the recipient, newest first."""

    return [
        _to_read_model(notification)
        for notification in get_notification_history_uc(store, recipient_id)
    ]


@router.post(
    "/create-for-transaction/{transaction_id}",
    response_model=NotificationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_notification_for_transaction(
    transaction_id: str,
    payload: NotificationCreate,
    store: NotificationStore = Depends(get_notification_store),
    transaction_verifier: TransactionVerifier = Depends(get_transaction_verifier),
) -> NotificationRead:
    try:
        notification = create_notification_for_transaction_uc(
            store, transaction_verifier, transaction_id, payload.to_draft()
        )
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return _to_read_model(notification)


@router.post(
    "/create-for-account/{account_number}",
    response_model=NotificationRead,
    status_code=status.HTTP_201_CREATED,
)
def create_notification_for_account(
    account_number: str,
    payload: NotificationCreate,
    store: NotificationStore = Depends(get_notification_store),
    account_verifier: AccountVerifier = Depends(get_account_verifier),
) -> NotificationRead:
    try:
        notification = create_notification_for_account_uc(
            store, account_verifier, account_number, payload.to_draft()
        )
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return _to_read_model(notification)


@router.post("/calculate-fees/{transaction_id}", response_model=OperationResponse)
def calculate_fees_and_notify(
    transaction_id: str,
    payload: NotificationCreate,
    store: NotificationStore = Depends(get_notification_store),
    transaction_verifier: TransactionVerifier = Depends(get_transaction_verifier),
    email_gateway: EmailGateway = Depends(get_email_gateway),
) -> OperationResponse:
    """Email the fees computed by the transaction service."""

    try:
        result = calculate_fees_and_notify_uc(
            store, transaction_verifier, email_gateway, transaction_id, payload.to_draft()
        )
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return OperationResponse(
        message=result.message,
        notification_id=result.notification.notification_id,
        status=result.notification.status,
    )


@router.post("/fraud-check/{transaction_id}", response_model=OperationResponse)
def check_fraud_and_notify(
    transaction_id: str,
    payload: NotificationCreate,
    store: NotificationStore = Depends(get_notification_store),
    transaction_verifier: TransactionVerifier = Depends(get_transaction_verifier),
    email_gateway: EmailGateway = Depends(get_email_gateway),
) -> OperationResponse:
    """Email a security alert carrying the anti-fraud assessment."""

    try:
        result = check_fraud_and_notify_uc(
            store, transaction_verifier, email_gateway, transaction_id, payload.to_draft()
        )
    except NotificationError as exc:
        raise _http_error(exc) from exc
    return OperationResponse(
        message=result.message,
        notification_id=result.notification.notification_id,
        status=result.notification.status,
    )


__all__ = ["router"]
