from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Optional, Protocol

from .model import OutgoingEmail

logger = logging.getLogger(__name__)


class MailSender(Protocol):
    def send(self, email: OutgoingEmail) -> None:
        """Deliver one email; raise on failure so the dispatcher can retry."""

        raise NotImplementedError


@dataclass(frozen=True)
class SmtpConfig:
    host: str
    port: int
    username: str
    password: str
    from_email: str
    from_name: str = "TimeConnect"
    use_tls: bool = True
    timeout: float = 50.0


class SmtpMailSender(MailSender):
    def __init__(self, config: SmtpConfig):
        self._config = config

    def _build(self, email: OutgoingEmail) -> MIMEMultipart:
        msg = MIMEMultipart()
        msg["From"] = formataddr((self._config.from_name, self._config.from_email))
        msg["To"] = formataddr((email.to_name, email.to_email))
        msg["Subject"] = email.subject
        msg.attach(MIMEText(email.body, "plain"))
        return msg

    def send(self, email: OutgoingEmail) -> None:
        cfg = self._config
        with smtplib.SMTP(cfg.host, cfg.port, timeout=cfg.timeout) as server:
            server.ehlo()
            if cfg.use_tls:
                server.starttls()
                server.ehlo()
            server.login(cfg.username, cfg.password)
            server.send_message(self._build(email))
        logger.info("Email sent to %s", email.to_email)


class LogMailSender(MailSender):
    """Fallback when SMTP credentials are missing: records the send, delivers nothing."""

    def send(self, email: OutgoingEmail) -> None:
        logger.info("Mail delivery disabled; would send %r to %s", email.subject, email.to_email)


def build_mail_sender(mail_config: Optional[dict]) -> MailSender:
    mail_config = mail_config or {}
    username = mail_config.get("username")
    password = mail_config.get("password")
    if not username or not password:
        logger.warning("Mail credentials missing (MAIL_USERNAME / MAIL_PASSWORD); emails will only be logged")
        return LogMailSender()

    return SmtpMailSender(
        SmtpConfig(
            host=str(mail_config.get("host", "smtp.gmail.com")),
            port=int(mail_config.get("port", 587)),
            username=username,
            password=password,
            from_email=mail_config.get("from_email") or username,
            from_name=mail_config.get("from_name") or "TimeConnect",
            use_tls=bool(mail_config.get("use_tls", True)),
        )
    )
