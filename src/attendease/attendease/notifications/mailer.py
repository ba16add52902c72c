from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Protocol

from ..core.exceptions import DeliveryError

logger = logging.getLogger(__name__)


class Mailer(Protocol):
    def send(self, *, to: str, subject: str, body: str) -> None:
        raise NotImplementedError


@dataclass(frozen=True)
class SmtpMailer:
    host: str
    port: int
    user: str
    password: str
    sender: str
    use_tls: bool = True

    def send(self, *, to: str, subject: str, body: str) -> None:
        if not self.host or not self.user or not self.password:
            raise DeliveryError("SMTP is not configured")

        message = EmailMessage()
        message["Subject"] = subject
        message["From"] = self.sender or self.user
        message["To"] = to
        message.set_content(body)

        try:
            with smtplib.SMTP(self.host, self.port, timeout=30) as server:
                if self.use_tls:
                    server.starttls()
                server.login(self.user, self.password)
                server.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Mail to %s failed: %s", to, e, exc_info=True)
            raise DeliveryError("Failed to send email") from e

        logger.info("Mail '%s' sent to %s", subject, to)


class ConsoleMailer:
    """Development mailer: writes the message to the log instead of sending it."""

    def send(self, *, to: str, subject: str, body: str) -> None:
        logger.info("[console mail] to=%s subject=%s\n%s", to, subject, body)


def build_mailer(settings) -> Mailer:
    backend = str(getattr(settings, "MAIL_BACKEND", "console")).lower()
    if backend == "smtp":
        return SmtpMailer(
            host=getattr(settings, "SMTP_HOST", ""),
            port=int(getattr(settings, "SMTP_PORT", 587)),
            user=getattr(settings, "SMTP_USER", ""),
            password=getattr(settings, "SMTP_PASSWORD", ""),
            sender=getattr(settings, "MAIL_FROM", ""),
            use_tls=bool(getattr(settings, "SMTP_USE_TLS", True)),
        )
    return ConsoleMailer()
