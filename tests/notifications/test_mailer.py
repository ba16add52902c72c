from __future__ import annotations

from types import SimpleNamespace

import pytest

from attendease.core.exceptions import DeliveryError
from attendease.notifications import messages
from attendease.notifications.mailer import ConsoleMailer, SmtpMailer, build_mailer


def test_build_mailer_picks_backend():
    assert isinstance(build_mailer(SimpleNamespace(MAIL_BACKEND="console")), ConsoleMailer)

    smtp = build_mailer(
        SimpleNamespace(
            MAIL_BACKEND="SMTP",
            SMTP_HOST="smtp.example.com",
            SMTP_PORT="2525",
            SMTP_USER="bot@example.com",
            SMTP_PASSWORD="pw",
            MAIL_FROM="",
            SMTP_USE_TLS=False,
        )
    )
    assert isinstance(smtp, SmtpMailer)
    assert smtp.port == 2525
    assert smtp.use_tls is False


def test_unconfigured_smtp_refuses_to_send():
    mailer = SmtpMailer(host="", port=587, user="", password="", sender="")
    with pytest.raises(DeliveryError):
        mailer.send(to="a@example.com", subject="s", body="b")


def test_otp_messages_carry_code_and_expiry():
    subject, body = messages.login_otp("654321", minutes=10)
    assert "654321" in body
    assert "10 minutes" in body
    assert subject

    _, body = messages.password_reset_otp("111222", minutes=10)
    assert "111222" in body
