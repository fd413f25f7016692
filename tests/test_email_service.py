import asyncio
import logging
import smtplib

import pytest

from knotty.core.config import settings
from knotty.domain.enums import CodePurpose
from knotty.infrastructure.external_services.email_service import EmailService


class RecordingSMTP:
    sent = []

    def __init__(self, host, port):
        self.host = host
        self.port = port

    def __enter__(self):
        return self

    def __exit__(self, *args):
        return False

    def starttls(self):
        pass

    def login(self, username, password):
        pass

    def send_message(self, msg):
        RecordingSMTP.sent.append(msg)


class RefusingSMTP(RecordingSMTP):

    def send_message(self, msg):
        raise smtplib.SMTPRecipientsRefused({msg["To"]: (550, b"no such user")})


@pytest.fixture
def smtp_settings(monkeypatch):
    monkeypatch.setattr(settings, "SMTP_HOST", "smtp.example.com")
    monkeypatch.setattr(settings, "SMTP_USERNAME", "mailer")
    monkeypatch.setattr(settings, "SMTP_PASSWORD", "mailer-password")
    monkeypatch.setattr(settings, "EMAIL_SIMULATE", False)
    RecordingSMTP.sent = []


def test_unconfigured_smtp_simulates_delivery(monkeypatch):
    monkeypatch.setattr(settings, "SMTP_HOST", None)
    monkeypatch.setattr(smtplib, "SMTP", RefusingSMTP)

    sent = asyncio.run(EmailService().send_verification_code("buyer@example.com", "A1B2C3", CodePurpose.LOGIN))

    assert sent is True


def test_simulated_code_is_logged(monkeypatch, caplog):
    monkeypatch.setattr(settings, "SMTP_HOST", None)
    caplog.set_level(logging.DEBUG, logger="knotty.infrastructure.external_services.email_service")

    asyncio.run(EmailService().send_verification_code("buyer@example.com", "D4E5F6", CodePurpose.LOGIN))

    assert any("D4E5F6" in record.getMessage() and "buyer@example.com" in record.getMessage() for record in caplog.records)


def test_opt_in_simulation_skips_configured_smtp(monkeypatch, smtp_settings):
    monkeypatch.setattr(settings, "EMAIL_SIMULATE", True)
    monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)

    sent = asyncio.run(EmailService().send_verification_code("buyer@example.com", "A1B2C3", CodePurpose.LOGIN))

    assert sent is True
    assert RecordingSMTP.sent == []


def test_development_mode_sends_when_smtp_is_configured(monkeypatch, smtp_settings):
    monkeypatch.setattr(settings, "ENVIRONMENT", "development")
    monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)

    sent = asyncio.run(EmailService().send_verification_code("buyer@example.com", "A1B2C3", CodePurpose.LOGIN))

    assert sent is True
    [message] = RecordingSMTP.sent
    assert "A1B2C3" in message.as_string()


def test_code_is_sent_over_smtp(monkeypatch, smtp_settings):
    monkeypatch.setattr(smtplib, "SMTP", RecordingSMTP)

    sent = asyncio.run(
        EmailService().send_verification_code("buyer@example.com", "A1B2C3", CodePurpose.PASSWORD_RESET)
    )

    assert sent is True
    [message] = RecordingSMTP.sent
    assert message["To"] == "buyer@example.com"
    assert message["Subject"] == "Reset your Knotty password"
    assert "A1B2C3" in message.as_string()


def test_refused_delivery_reports_failure(monkeypatch, smtp_settings):
    monkeypatch.setattr(smtplib, "SMTP", RefusingSMTP)

    sent = asyncio.run(EmailService().send_verification_code("buyer@example.com", "A1B2C3", CodePurpose.MFA_SETUP))

    assert sent is False
