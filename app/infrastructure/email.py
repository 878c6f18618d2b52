"""Email delivery gateway backed by the SendGrid REST API."""

from __future__ import annotations

import json
import logging
from typing import Any

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from app.config import get_settings
from app.domain.ports import DeliveryResult

logger = logging.getLogger(__name__)


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if body in (None, ""):
        return None

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            parsed = json.loads(body)
        except json.JSONDecodeError:
            return body
    else:
        parsed = body

    if isinstance(parsed, dict):
        errors = parsed.get("errors")
        if isinstance(errors, list):
            messages: list[str] = []
            for item in errors:
                if not isinstance(item, dict):
                    continue
                message = item.get("message")
                field = item.get("field")
                if message and field:
                    messages.append(f"{message} (field: {field})")
                elif message:
                    messages.append(str(message))
            if messages:
                return "; ".join(messages)
        try:
            return json.dumps(parsed)
        except (TypeError, ValueError):
            return None

    if isinstance(parsed, list):
        return "; ".join(str(item) for item in parsed)

    return None


def _describe_sendgrid_exception(exc: Exception) -> str:
    """Log a SendGrid API error and return the text stored as failure reason."""

    status_code = getattr(exc, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(exc, "body", None))

    if status_code and details:
        logger.error(
            "SendGrid API request failed with status %s: %s", status_code, details
        )
        return f"SendGrid status {status_code}: {details}"
    if status_code:
        logger.error("SendGrid API request failed with status %s", status_code)
        return f"SendGrid status {status_code}"
    if details:
        logger.error("SendGrid API request failed: %s", details)
        return details
    logger.exception("Error sending email via SendGrid: %s", exc)
    return str(exc) or exc.__class__.__name__


def _describe_unsuccessful_response(response: Any) -> str:
    status_code = getattr(response, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(response, "body", None))

    if details:
        logger.error(
            "SendGrid API responded with status %s: %s", status_code, details
        )
        return f"SendGrid status {status_code}: {details}"
    logger.error("SendGrid API responded with status %s", status_code)
    return f"SendGrid status {status_code}"


def send_email(subject: str, body: str, recipient: str) -> DeliveryResult:
    """Send a plain text email using the configured SendGrid credentials."""

    settings = get_settings()
    if not (settings.sendgrid_api_key and settings.sendgrid_sender):
        logger.info("SendGrid configuration incomplete; skipping email delivery")
        return DeliveryResult.failed("SendGrid configuration incomplete")

    message = Mail(
        from_email=settings.sendgrid_sender,
        to_emails=recipient,
        subject=subject,
        plain_text_content=body,
    )

    try:
        client = SendGridAPIClient(settings.sendgrid_api_key)
        client.client.timeout = settings.upstream_timeout_seconds
        response = client.send(message)
    except Exception as exc:  # network failures surface as delivery failures
        return DeliveryResult.failed(_describe_sendgrid_exception(exc))

    status_code = getattr(response, "status_code", None)
    if not isinstance(status_code, int) or not 200 <= status_code < 300:
        return DeliveryResult.failed(_describe_unsuccessful_response(response))

    return DeliveryResult.ok()


class SendGridEmailGateway:
    """Email gateway used by the lifecycle engine."""

    def send_email(self, address: str, subject: str, body: str) -> DeliveryResult:
        return send_email(subject, body, address)


__all__ = ["SendGridEmailGateway", "send_email"]
