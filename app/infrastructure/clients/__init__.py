"""HTTP clients for the upstream banking services."""

from .account_client import AccountServiceClient
from .transaction_client import TransactionServiceClient

__all__ = [
    "AccountServiceClient",
    "TransactionServiceClient",
]
