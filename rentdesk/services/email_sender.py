"""SMTP delivery of notification e-mails."""

from __future__ import annotations

import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from rentdesk.core.config import Config, get_config

logger = logging.getLogger(__name__)


class EmailSender:
    """Sends transactional e-mails; every failure is logged and reported as False."""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or get_config()

    @property
    def enabled(self) -> bool:
        return self.config.NOTIFY_EMAIL_ENABLED and bool(self.config.SMTP_SERVER)

    def send_email(self, to_email: str, subject: str, body: str, is_html: bool = False) -> bool:
        if not self.enabled:
            logger.debug("email.disabled", extra={"event": "email.disabled"})
            return False

        try:
            message = MIMEMultipart("alternative")
            message["Subject"] = subject
            message["From"] = self.config.EMAIL_FROM
            message["To"] = to_email
            message.attach(MIMEText(body, "html" if is_html else "plain"))

            with smtplib.SMTP(self.config.SMTP_SERVER, self.config.SMTP_PORT, timeout=10) as server:
                server.starttls()
                if self.config.SMTP_USERNAME:
                    server.login(self.config.SMTP_USERNAME, self.config.SMTP_PASSWORD or "")
                server.send_message(message)
            return True
        except Exception:
            logger.exception("email.send_failed", extra={"event": "email.send_failed", "to_email": to_email})
            return False
