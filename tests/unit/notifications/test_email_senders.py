"""
Unit tests for the email sender adapters.
"""
import pytest
import requests
from django.core import mail

from core.domain.exceptions import EmailDeliveryError
from notifications.infrastructure.django_email_sender import DjangoEmailSender
from notifications.infrastructure.factory import get_email_sender
from notifications.infrastructure.resend_email_sender import ResendEmailSender


class FakeResponse:
    def __init__(self, status_code=200, body=None):
        self.status_code = status_code
        self.body = body if body is not None else {"id": "re_123"}

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")

    def json(self):
        if isinstance(self.body, Exception):
            raise self.body
        return self.body


@pytest.fixture
def resend():
    return ResendEmailSender(
        api_key="re_test_key",
        from_email="License Manager <notifications@resend.dev>",
        api_url="https://api.resend.test/emails",
        timeout_seconds=5,
    )


class TestResendEmailSender:
    """Tests for ResendEmailSender."""

    def test_post_payload(self, resend, monkeypatch):
        calls = []

        def fake_post(url, json, headers, timeout):
            calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
            return FakeResponse()

        monkeypatch.setattr(requests, "post", fake_post)

        assert resend._post("it@example.com", "Subject", "<p>Body</p>") == "re_123"
        call = calls[0]
        assert call["url"] == "https://api.resend.test/emails"
        assert call["headers"]["Authorization"] == "Bearer re_test_key"
        assert call["json"] == {
            "from": "License Manager <notifications@resend.dev>",
            "to": ["it@example.com"],
            "subject": "Subject",
            "html": "<p>Body</p>",
        }
        assert call["timeout"] == 5

    def test_http_error(self, resend, monkeypatch):
        monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse(422))

        with pytest.raises(EmailDeliveryError, match="422"):
            resend._post("it@example.com", "Subject", "<p>Body</p>")

    def test_connection_error(self, resend, monkeypatch):
        def fake_post(*args, **kwargs):
            raise requests.exceptions.ConnectionError("connection refused")

        monkeypatch.setattr(requests, "post", fake_post)

        with pytest.raises(EmailDeliveryError, match="connection refused"):
            resend._post("it@example.com", "Subject", "<p>Body</p>")

    def test_invalid_json(self, resend, monkeypatch):
        response = FakeResponse(body=ValueError("not json"))
        monkeypatch.setattr(requests, "post", lambda *args, **kwargs: response)

        with pytest.raises(EmailDeliveryError, match="invalid response"):
            resend._post("it@example.com", "Subject", "<p>Body</p>")

    def test_missing_id(self, resend, monkeypatch):
        monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse(body={}))

        with pytest.raises(EmailDeliveryError, match="message id"):
            resend._post("it@example.com", "Subject", "<p>Body</p>")

    @pytest.mark.asyncio
    async def test_send_runs_post(self, resend, monkeypatch):
        monkeypatch.setattr(requests, "post", lambda *args, **kwargs: FakeResponse())

        assert await resend.send("it@example.com", "Subject", "<p>Body</p>") == "re_123"


class TestDjangoEmailSender:
    def test_send_uses_mail_backend(self, settings):
        settings.EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
        sender = DjangoEmailSender(from_email="alerts@example.com")

        message_id = sender._send("it@example.com", "Subject", "<p>Body</p>")

        assert message_id
        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ["it@example.com"]
        assert mail.outbox[0].body == "Body"
        assert mail.outbox[0].alternatives[0][0] == "<p>Body</p>"


class TestEmailSenderFactory:
    def test_django_sender_without_api_key(self, settings):
        settings.RESEND_API_KEY = ""
        assert isinstance(get_email_sender(), DjangoEmailSender)

    def test_resend_sender_with_api_key(self, settings):
        settings.RESEND_API_KEY = "re_live"
        sender = get_email_sender()
        assert isinstance(sender, ResendEmailSender)
        assert sender.api_key == "re_live"
