"""Unit tests for the SendGrid email gateway."""

from __future__ import annotations

import json
import types

import pytest

from app.infrastructure import email as email_module


class DummySettings:
    sendgrid_api_key = "SG.fake"
    sendgrid_sender = "alerts@bank.example"
    upstream_timeout_seconds = 3.5


class _RecordingClient:
    """Stand-in for ``SendGridAPIClient`` capturing the outgoing message."""

    messages: list = []
    timeouts: list = []

    def __init__(self, api_key: str):
        self.api_key = api_key
        self.client = types.SimpleNamespace(timeout=None)

    def send(self, message):
        self.messages.append(message)
        self.timeouts.append(self.client.timeout)
        return types.SimpleNamespace(status_code=202, body=None)


def test_send_email_without_configuration(monkeypatch: pytest.MonkeyPatch) -> None:
    """When SendGrid settings are missing the delivery fails without a request."""

    class MissingSettings:
        sendgrid_api_key = None
        sendgrid_sender = None

    monkeypatch.setattr(email_module, "get_settings", lambda: MissingSettings())

    result = email_module.send_email("Subject", "Body", "user@example.com")

    assert result.success is False
    assert result.error_detail == "SendGrid configuration incomplete"


def test_gateway_sends_plain_text_message(monkeypatch: pytest.MonkeyPatch) -> None:
    _RecordingClient.messages = []
    _RecordingClient.timeouts = []
    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", _RecordingClient)

    result = email_module.SendGridEmailGateway().send_email(
        "user@example.com", "Transaction Fees Notification", "Transaction fees: $5.00"
    )

    assert result.success is True
    assert result.error_detail is None
    [message] = _RecordingClient.messages
    payload = message.get()
    assert payload["subject"] == "Transaction Fees Notification"
    assert payload["from"]["email"] == "alerts@bank.example"
    assert payload["personalizations"][0]["to"][0]["email"] == "user@example.com"
    assert payload["content"][0]["value"] == "Transaction fees: $5.00"
    assert _RecordingClient.timeouts == [3.5]


def test_send_email_reports_forbidden_error(monkeypatch: pytest.MonkeyPatch, caplog):
    """Forbidden responses from SendGrid surface as failure details and logs."""

    class FakeForbiddenError(Exception):
        status_code = 403
        body = json.dumps(
            {"errors": [{"message": "The provided authorization grant is invalid."}]}
        ).encode()

    class FailingClient(_RecordingClient):
        def send(self, message):
            raise FakeForbiddenError()

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", FailingClient)

    with caplog.at_level("ERROR"):
        result = email_module.send_email("Subject", "Body", "user@example.com")

    assert result.success is False
    assert result.error_detail == (
        "SendGrid status 403: The provided authorization grant is invalid."
    )
    assert "status 403" in caplog.text


def test_send_email_unsuccessful_status(monkeypatch: pytest.MonkeyPatch) -> None:
    class RejectingClient(_RecordingClient):
        def send(self, message):
            return types.SimpleNamespace(
                status_code=400,
                body=json.dumps(
                    {"errors": [{"message": "Does not contain a valid address.", "field": "to"}]}
                ),
            )

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module, "SendGridAPIClient", RejectingClient)

    result = email_module.send_email("Subject", "Body", "not-an-address")

    assert result.success is False
    assert result.error_detail == (
        "SendGrid status 400: Does not contain a valid address. (field: to)"
    )


def test_sendgrid_requests_use_bounded_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    timeouts = []

    def _capture(self, message):
        timeouts.append(self.client.timeout)
        return types.SimpleNamespace(status_code=202, body=None)

    monkeypatch.setattr(email_module, "get_settings", lambda: DummySettings())
    monkeypatch.setattr(email_module.SendGridAPIClient, "send", _capture)

    result = email_module.send_email("Subject", "Body", "user@example.com")

    assert result.success is True
    assert timeouts == [3.5]
