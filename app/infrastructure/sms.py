"""SMS delivery gateway talking to an HTTP SMS provider."""

from __future__ import annotations

import logging

import httpx

from app.config import Settings, get_settings
from app.domain.ports import DeliveryResult

logger = logging.getLogger(__name__)


class HttpSmsGateway:
    """Submit SMS messages as JSON to the configured provider endpoint.

    The provider is expected to answer 2xx when it accepted the message; any
    other status, a timeout or a transport error is reported as a failed
    delivery rather than raised.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._transport = transport

    def is_configured(self) -> bool:
        return bool(self._settings.sms_api_url and self._settings.sms_api_key)

    def send_sms(self, number: str, body: str) -> DeliveryResult:
        if not self.is_configured():
            logger.info("SMS provider configuration incomplete; skipping SMS delivery")
            return DeliveryResult.failed("SMS provider configuration incomplete")

        payload = {"to": number, "body": body}
        if self._settings.sms_sender:
            payload["from"] = self._settings.sms_sender
        headers = {"Authorization": f"Bearer {self._settings.sms_api_key}"}

        try:
            with httpx.Client(
                timeout=self._settings.upstream_timeout_seconds,
                transport=self._transport,
            ) as client:
                response = client.post(self._settings.sms_api_url, json=payload, headers=headers)
        except httpx.TimeoutException:
            logger.error("SMS provider timed out sending to %s", number)
            return DeliveryResult.failed("SMS provider timed out")
        except httpx.HTTPError as exc:
            logger.error("SMS provider request failed: %s", exc)
            return DeliveryResult.failed(f"SMS provider unreachable: {exc}")

        if not response.is_success:
            detail = response.text[:500] if response.text else ""
            logger.error("SMS provider responded with status %s: %s", response.status_code, detail)
            return DeliveryResult.failed(
                f"SMS provider status {response.status_code}" + (f": {detail}" if detail else "")
            )

        return DeliveryResult.ok()


__all__ = ["HttpSmsGateway"]
