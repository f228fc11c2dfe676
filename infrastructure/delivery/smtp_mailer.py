from __future__ import annotations

import asyncio
import smtplib
from email.message import EmailMessage
from typing import Optional, Sequence

from core.logging.logger import StructuredLogger, get_logger
from domain.errors import DeliveryError
from domain.interfaces import IReportChannel


class SmtpMailer(IReportChannel):
    """Sends the HTML report by mail (plain-text summary as the alternative part)."""

    name = "smtp"

    def __init__(
        self,
        host: str,
        *,
        port: int = 25,
        sender: str = "",
        recipients: Sequence[str] = (),
        username: Optional[str] = None,
        password: Optional[str] = None,
        starttls: bool = False,
        timeout_s: float = 30.0,
        logger: Optional[StructuredLogger] = None,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.recipients = list(recipients)
        self.username = username
        self.password = password
        self.starttls = starttls
        self.timeout_s = timeout_s
        self.logger = logger or get_logger(__name__, service="delivery")

    @property
    def enabled(self) -> bool:
        return bool(self.host and self.sender and self.recipients)

    def build_message(self, *, subject: str, html: str, text: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = ", ".join(self.recipients)
        msg.set_content(text)
        msg.add_alternative(html, subtype="html")
        return msg

    def _send(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout_s) as smtp:
            if self.starttls:
                smtp.starttls()
            if self.username:
                smtp.login(self.username, self.password or "")
            smtp.send_message(msg)

    async def deliver(self, *, subject: str, html: str, text: str) -> None:
        if not self.enabled:
            self.logger.debug("smtp: skipping send (not configured)")
            return
        msg = self.build_message(subject=subject, html=html, text=text)
        try:
            await asyncio.to_thread(self._send, msg)
        except (smtplib.SMTPException, OSError) as e:
            raise DeliveryError(self.name, str(e)) from e
        self.logger.success(lambda: f"smtp: report sent to {len(self.recipients)} recipient(s)")
