"""
SMTP 메일 발송 클라이언트 (aiosmtplib)
"""
import asyncio
import logging
from email.message import EmailMessage
from typing import Optional

import aiosmtplib

from app.core.exceptions import NotificationError


logger = logging.getLogger(__name__)


class SmtpMailer:
    """비동기 SMTP 발송기"""

    def __init__(
        self,
        host: str,
        port: int,
        username: Optional[str] = None,
        password: Optional[str] = None,
        start_tls: bool = True,
        timeout: float = 10.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.start_tls = start_tls
        self.timeout = timeout

    @property
    def sender(self) -> Optional[str]:
        return self.username

    async def send(self, to: str, subject: str, body: str) -> None:
        """
        텍스트 메일 발송

        Raises:
            NotificationError: 발송 실패 (설정 누락, 연결 실패, 타임아웃)
        """
        if not self.username or not self.password:
            raise NotificationError("SMTP credentials are not configured")

        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)

        try:
            await aiosmtplib.send(
                message,
                hostname=self.host,
                port=self.port,
                username=self.username,
                password=self.password,
                start_tls=self.start_tls,
                timeout=self.timeout,
            )
        except (aiosmtplib.SMTPException, asyncio.TimeoutError, OSError) as e:
            raise NotificationError(f"SMTP delivery failed: {str(e)}") from e

        logger.info(f"[Mailer] 메일 발송 완료: {to}")
