"""Client for the account management service."""

from __future__ import annotations

import httpx

from app.config import Settings, get_settings
from app.domain.ports import VerificationResult

from .base import UpstreamClient


class AccountServiceClient(UpstreamClient):
    service_name = "account"

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        super().__init__(
            f"{settings.account_service_url.rstrip('/')}/api/accounts",
            timeout=settings.upstream_timeout_seconds,
            transport=transport,
        )

    def verify_account(self, account_number: str) -> VerificationResult:
        response = self._get("/fetch_general_data", params={"accountNumber": account_number})
        if response.status_code == httpx.codes.NOT_FOUND:
            return VerificationResult(exists=False)
        if not response.is_success:
            raise self._unexpected_status(response)
        return VerificationResult(exists=True, raw=self._body(response))


__all__ = ["AccountServiceClient"]
