from .notification import (
    ExpiryResponse,
    MarkReadResponse,
    NotificationCreate,
    NotificationRead,
    NotificationStatusRead,
    NotificationUpdate,
    OperationResponse,
    ResendResponse,
)

__all__ = [
    "ExpiryResponse",
    "MarkReadResponse",
    "NotificationCreate",
    "NotificationRead",
    "NotificationStatusRead",
    "NotificationUpdate",
    "OperationResponse",
    "ResendResponse",
]
