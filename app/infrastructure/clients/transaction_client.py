"""Client for the transaction service."""

from __future__ import annotations

import httpx

from app.config import Settings, get_settings
from app.domain.ports import TransactionCheckResult, VerificationResult

from .base import UpstreamClient


class TransactionServiceClient(UpstreamClient):
    """Existence, fee and anti-fraud lookups for a transaction."""

    service_name = "transaction"

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        super().__init__(
            f"{settings.transaction_service_url.rstrip('/')}/api/transactions",
            timeout=settings.upstream_timeout_seconds,
            transport=transport,
        )

    def verify_transaction(self, transaction_id: str) -> VerificationResult:
        response = self._get(f"/get/{transaction_id}")
        if response.status_code == httpx.codes.NOT_FOUND:
            return VerificationResult(exists=False)
        if not response.is_success:
            raise self._unexpected_status(response)
        return VerificationResult(exists=True, raw=self._body(response))

    def calculate_fees(self, transaction_id: str) -> TransactionCheckResult:
        return self._check(f"/calculate-fees/{transaction_id}")

    def check_fraud(self, transaction_id: str) -> TransactionCheckResult:
        return self._check(f"/anti-fraud-check/{transaction_id}")

    def _check(self, path: str) -> TransactionCheckResult:
        response = self._get(path)
        if not response.is_success:
            return TransactionCheckResult(success=False, text=response.text or "")
        return TransactionCheckResult(success=True, text=response.text.strip())


__all__ = ["TransactionServiceClient"]
