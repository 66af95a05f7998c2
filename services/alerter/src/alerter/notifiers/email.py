"""
Email notifier.

Sends plain-text alert mails through an SMTP relay. ``smtplib`` is
blocking, so delivery runs in a worker thread to keep the event loop free.
"""

from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage

import structlog

from volt_common.models import AlerterConfig, Message

from ..errors import ConfigValidationError, SendError
from .base import Notifier
from .formatter import format_alert_text

logger = structlog.get_logger()


def _split_addresses(value: str) -> list[str]:
    return [addr.strip() for addr in value.split(",") if addr.strip()]


class EmailNotifier(Notifier):
    """Send alert messages by email.

    Options:
        to: Comma-separated recipient addresses (required).
        from: Sender address; defaults to ``sender``.
        subject_prefix: Prepended to the subject line.
    """

    name: str = "email"

    def __init__(
        self,
        *,
        smtp_host: str = "localhost",
        smtp_port: int = 25,
        username: str = "",
        password: str = "",
        use_tls: bool = False,
        sender: str = "alerter@localhost",
        timeout: float = 10.0,
    ) -> None:
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.sender = sender
        self.timeout = timeout

    def validate_config(self, config: AlerterConfig) -> None:
        self._require(config, "to")
        recipients = _split_addresses(config.options["to"])
        if not recipients:
            raise ConfigValidationError("email 'to' option has no addresses")
        bad = [addr for addr in recipients if "@" not in addr]
        if bad:
            raise ConfigValidationError(f"email 'to' contains invalid address(es): {', '.join(bad)}")

    def build_email(self, msg: Message, config: AlerterConfig) -> EmailMessage:
        """Build the MIME message for *msg*."""
        opts = config.options
        prefix = opts.get("subject_prefix", "[alerter]")
        mail = EmailMessage()
        mail["Subject"] = f"{prefix} {msg.type.upper()}: {msg.title or msg.source}".strip()
        mail["From"] = opts.get("from") or self.sender
        mail["To"] = ", ".join(_split_addresses(opts["to"]))
        mail.set_content(format_alert_text(msg))
        return mail

    def _deliver(self, mail: EmailMessage) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as client:
            if self.use_tls:
                client.starttls()
            if self.username:
                client.login(self.username, self.password)
            client.send_message(mail)

    async def send(self, msg: Message, config: AlerterConfig) -> None:
        try:
            mail = self.build_email(msg, config)
        except ValueError as exc:
            raise SendError(f"Unable to build email: {exc}") from exc
        try:
            await asyncio.to_thread(self._deliver, mail)
        except (smtplib.SMTPException, OSError) as exc:
            raise SendError(f"SMTP delivery failed: {exc}") from exc
        logger.info(
            "email_delivered",
            correlation_id=msg.correlation_id,
            notifier=self.name,
            recipients=mail["To"],
        )
